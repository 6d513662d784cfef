from enum import IntEnum

class Quality(IntEnum):
    BLACKOUT = 0
    FAMILIAR = 1
    EASY_TO_RECALL = 2
    HARD = 3
    HESITANT = 4
    PERFECT = 5

QUALITY_LABELS = {
    Quality.BLACKOUT: "complete blackout",
    Quality.FAMILIAR: "incorrect, felt familiar",
    Quality.EASY_TO_RECALL: "incorrect, easy once seen",
    Quality.HARD: "correct with serious effort",
    Quality.HESITANT: "correct after hesitation",
    Quality.PERFECT: "perfect recall",
}
