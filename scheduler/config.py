DEFAULT_EASINESS = 2.5
MIN_EASINESS = 1.3

MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3    # lowest quality counted as a successful recall

FAILED_INTERVAL_DAYS = 1
FIRST_INTERVAL_DAYS = {
    1: 1,              # 1 day after the first success
    2: 6,              # fixed 6 days after the second
}
