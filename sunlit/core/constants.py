"""
Tunable constants for the solar and shadow core.

These are the defaults for OcclusionConfig and SolarConfig. The partial
slack factors are starting values that still need calibrating against
field observations.
"""

# 높이 정보가 전혀 없는 건물의 기본 높이 (미터)
DEFAULT_HEIGHT_M = 10.0

# 층수 → 높이 추정 시 한 층의 높이 (미터)
METERS_PER_LEVEL = 3.0

# 일출/일몰 부근 tan 특이점 방지용 최대 그림자 길이 (미터)
MAX_SHADOW_LENGTH_M = 500.0

# 외곽선이 없는 건물의 기본 유효 반경 (미터)
DEFAULT_BUILDING_RADIUS_M = 10.0

# 완전 가림 판정 각도 허용치 확대 계수
ANGULAR_SLACK = 1.15

# 부분 일조 판정용 길이/각도 확대 계수
PARTIAL_LENGTH_SLACK = 1.25
PARTIAL_ANGLE_SLACK = 1.75

# atan(radius / distance) 계산 시 거리 하한 (미터)
MIN_DISTANCE_M = 1.0

# 골든아워 시작 고도 (도, 일몰 전 태양이 이 고도로 내려오는 시각)
GOLDEN_HOUR_ALTITUDE_DEG = 6.0

# 일출/일몰 기준 고도 (도, 기하학적 지평선. 낮 판정 altitude > 0 과 일치)
SUNRISE_ALTITUDE_DEG = 0.0

# 이벤트 시각 보정 (위치 계산식 기준 뉴턴 반복)
EVENT_REFINE_ITERATIONS = 4
EVENT_REFINE_MAX_STEP_SEC = 600.0

# 신뢰도 기준값. PARTIAL_MAX_CONFIDENCE < SHADED_BASE_CONFIDENCE 유지
SHADED_BASE_CONFIDENCE = 0.5
PARTIAL_MAX_CONFIDENCE = 0.45
PARTIAL_MIN_CONFIDENCE = 0.2
