"""
Classifier configuration for feedback triage.
Contains output labels, fallbacks, thresholds and NPS bands.
"""

# Classifier Configuration
CLASSIFIER_CONFIG = {
    # Fallback labels
    "fallbacks": {
        "category": "General Feedback",
        "area": "Other",
        "user_type": "General User",
        # Used instead of the picker when the comment is blank
        "empty_area": "Other",
        "empty_user_type": "Unknown",
    },

    # Comment type (constructiveness) labels and thresholds
    "comment_types": {
        "empty": "No Comment",
        "non_constructive": "Non-constructive",
        "constructive": "Constructive",
        "general": "General",
    },
    "min_comment_length": 10,  # Normalized characters; shorter comments are low-signal

    # Contextual acronym checks
    "proximity_window": 3,

    # Input record columns
    "columns": {
        "comment": "Comments",
        "nps": "NPS",
        "version": "Version",
    },
}

# NPS Configuration
NPS_CONFIG = {
    "promoter_min": 9,
    "passive_min": 7,  # 7-8 passive, 0-6 detractor
    # Checked top-down; first band whose min the score reaches wins
    "rating_bands": [
        {"min": 50, "label": "Excellent"},
        {"min": 30, "label": "Very Good"},
        {"min": 0, "label": "Good"},
        {"min": -30, "label": "Needs Work"},
        {"min": -100, "label": "Critical"},
    ],
}
