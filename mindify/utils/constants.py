"""Constants and enums for the Mindify application.

This module defines the constants and enums shared by the forum,
assessment and chat components.
"""

from enum import Enum


# ============================================================================
# CORE ENUMS
# ============================================================================

class ResultBand(str, Enum):
    """Qualitative band attached to an assessment score."""

    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class Collections(str, Enum):
    """MongoDB collection names."""

    POSTS = "posts"
    TESTS = "tests"
    TEST_RESULTS = "testresults"


# ============================================================================
# SCORING
# ============================================================================

# Upper bound (inclusive) of each band; anything above MODERATE_BAND_MAX is HIGH
LOW_BAND_MAX = 15
MODERATE_BAND_MAX = 25


# ============================================================================
# CHAT RELAY
# ============================================================================

DEFAULT_CHAT_SYSTEM_PROMPT = "You are a kind and helpful mental health assistant."
CHAT_FALLBACK_REPLY = "Sorry, I couldn't respond."
CHAT_FAILURE_MESSAGE = "Failed to fetch AI response."
CHAT_MISSING_MESSAGE = "No message provided."
CHAT_UNAVAILABLE_MESSAGE = "Chat service unavailable"


# ============================================================================
# ERROR MESSAGES
# ============================================================================

POST_NOT_FOUND = "Post not found"
TEST_NOT_FOUND = "Test not found"
