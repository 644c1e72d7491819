from enum import Enum


class EventType(str, Enum):
    POINTER_MOVE = "pointer_move"
    POINTER_CLICK = "pointer_click"
    KEY_DOWN = "key_down"
    PASTE = "paste"
    VISIBILITY_CHANGE = "visibility_change"
    QUESTION_START = "question_start"
    QUESTION_END = "question_end"
    ANSWER_CHANGE = "answer_change"
    SCROLL = "scroll"
    HOVER = "hover"                  # dwell on an interactive element
    HESITATION = "hesitation"        # client-reported hesitation
    CONTEXT_MENU = "context_menu"    # right-click attempt
    DEV_TOOLS = "dev_tools"          # dev tools detected
    TIMEOUT = "timeout"              # question timed out
    QUESTION_SKIP = "question_skip"


class StressLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class EnergyPattern(str, Enum):
    SUSTAINED_HIGH = "sustained_high"
    GRADUAL_DECLINE = "gradual_decline"
    MODERATE_FATIGUE = "moderate_fatigue"
    SIGNIFICANT_FATIGUE = "significant_fatigue"
    INSUFFICIENT_DATA = "insufficient_data"


class DecisionStyle(str, Enum):
    DECISIVE = "decisive"
    BALANCED = "balanced"
    DELIBERATIVE = "deliberative"
    CAUTIOUS = "cautious"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class IntegrityLevel(str, Enum):
    HIGH = "high"
    MODERATE = "moderate"
    QUESTIONABLE = "questionable"
    LOW = "low"


class InsightType(str, Enum):
    PRIORITY = "priority"
    STRENGTH = "strength"
    CONCERN = "concern"
    BEHAVIORAL = "behavioral"
    POSITIVE = "positive"
    TACTICAL = "tactical"
    WARNING = "warning"
    APPROACH = "approach"


class EngagementLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class CognitiveLoad(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
