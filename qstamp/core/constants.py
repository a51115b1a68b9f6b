# qstamp/core/constants.py

# 基础时间常量
SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR
MS_PER_SECOND = 1_000
MS_PER_MINUTE = SECONDS_PER_MINUTE * MS_PER_SECOND
MS_PER_HOUR = SECONDS_PER_HOUR * MS_PER_SECOND
MS_PER_DAY = SECONDS_PER_DAY * MS_PER_SECOND

# 盘前时间（本地 09:00:00），只能改常量，不支持运行时配置
PRE_MARKET_HOUR = 9
PRE_MARKET_MINUTE = 0
PRE_MARKET_SECOND = 0

# 格式化 layout（strftime 语法，%f = 3 位毫秒）
DEFAULT_LAYOUT = "%Y-%m-%d %H:%M:%S.%f"
DATETIME_LAYOUT = "%Y-%m-%d %H:%M:%S"
ONLY_DATE_LAYOUT = "%Y-%m-%d"
ONLY_TIME_LAYOUT = "%H:%M:%S"
CACHE_DATE_LAYOUT = "%Y%m%d"
