# sunlit/main.py
import os, asyncio
import uvicorn
from sunlit.settings import Settings
from sunlit.observability.health import create_app
from sunlit.observability.logging_setup import setup_logging, get_logger

def _b(name, default=False): return os.getenv(name, str(default)).lower() in ("1","true","yes","on")

def build_settings() -> Settings:
    s = Settings()

    # 가림 판정 튜닝값
    s.occlusion.default_height_m = float(os.getenv("SUNLIT_DEFAULT_HEIGHT_M", s.occlusion.default_height_m))
    s.occlusion.meters_per_level = float(os.getenv("SUNLIT_METERS_PER_LEVEL", s.occlusion.meters_per_level))
    s.occlusion.max_shadow_length_m = float(os.getenv("SUNLIT_MAX_SHADOW_LENGTH_M", s.occlusion.max_shadow_length_m))
    s.occlusion.default_building_radius_m = float(os.getenv("SUNLIT_DEFAULT_BUILDING_RADIUS_M", s.occlusion.default_building_radius_m))
    s.occlusion.partial_length_slack = float(os.getenv("SUNLIT_PARTIAL_LENGTH_SLACK", s.occlusion.partial_length_slack))
    s.occlusion.partial_angle_slack = float(os.getenv("SUNLIT_PARTIAL_ANGLE_SLACK", s.occlusion.partial_angle_slack))

    # 태양 계산
    s.solar.golden_hour_altitude_deg = float(os.getenv("SUNLIT_GOLDEN_HOUR_ALTITUDE_DEG", s.solar.golden_hour_altitude_deg))

    # Overpass
    s.overpass.api_url = os.getenv("SUNLIT_OVERPASS_URL", s.overpass.api_url)
    s.overpass.timeout_sec = float(os.getenv("SUNLIT_OVERPASS_TIMEOUT_SEC", s.overpass.timeout_sec))
    s.overpass.max_retries = int(os.getenv("SUNLIT_OVERPASS_MAX_RETRIES", s.overpass.max_retries))

    # 조회 제한
    s.query.max_bbox_degrees = float(os.getenv("SUNLIT_MAX_BBOX_DEGREES", s.query.max_bbox_degrees))
    s.query.max_radius_m = float(os.getenv("SUNLIT_MAX_RADIUS_M", s.query.max_radius_m))
    s.query.only_outdoor_seating = _b("SUNLIT_ONLY_OUTDOOR_SEATING", s.query.only_outdoor_seating)

    # 관측성
    s.observability.metrics_enabled = _b("SUNLIT_METRICS_ENABLED", s.observability.metrics_enabled)
    s.observability.http_port = int(os.getenv("SUNLIT_HTTP_PORT", s.observability.http_port))
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level)
    s.observability.log_colorize = _b("LOG_COLORIZE", s.observability.log_colorize)

    return s

async def main():
    s = build_settings()
    setup_logging(s.observability.log_level, colorize=s.observability.log_colorize)
    log = get_logger()
    log.info(f"설정 로드 완료 port:{s.observability.http_port} overpass:{s.overpass.api_url}")

    app = create_app(s)
    server = uvicorn.Server(
        uvicorn.Config(app, host="0.0.0.0", port=s.observability.http_port, log_level="info", log_config=None)
    )
    await server.serve()

def run():
    asyncio.run(main())

if __name__ == "__main__":
    run()
