"""
Label thresholds for every scoring metric.

All label-mapping functions read from here. Lower bounds are inclusive:
a credibility score of exactly 70 is "Trusted", 69 is "Moderate".
"""

# Credibility (0-100)
CREDIBILITY_HIGHLY_TRUSTED_MIN = 90
CREDIBILITY_TRUSTED_MIN = 70
CREDIBILITY_MODERATE_MIN = 40

# Gender bias (0-100, higher = more women-positive)
GENDER_NEUTRAL_SCORE = 50
GENDER_WOMEN_POSITIVE_MIN = 80
GENDER_BALANCED_MIN = 60
GENDER_NEUTRAL_MIN = 40
GENDER_CAUTION_MIN = 20

# Political bias: left/right phrase balance
POLITICAL_CENTER_BAND = 10
POLITICAL_STRONG_MIN = 20
POLITICAL_FAR_MIN = 30

# Commercial bias (0-100)
COMMERCIAL_PROMOTIONAL_MIN = 30

# AI content (probability 0.0-1.0). Label and color share these buckets.
AI_CONTENT_SOME_MIN = 0.25
AI_CONTENT_HIGH_MIN = 0.50
AI_CONTENT_MIN_WORDS = 8

# Sustainability (0-100)
SUSTAINABILITY_NEUTRAL_SCORE = 50
SUSTAINABILITY_LEADER_MIN = 80
SUSTAINABILITY_AWARE_MIN = 60
SUSTAINABILITY_NEUTRAL_MIN = 40
SUSTAINABILITY_CAUTION_MIN = 20

# Safety
VERIFIED_CONTENT_MIN_CREDIBILITY = CREDIBILITY_TRUSTED_MIN
WOMEN_FOCUSED_MIN_PHRASES = 2

# Summary
SUMMARY_TOP_K = 5
SUMMARY_MAX_PARAGRAPHS = 3
