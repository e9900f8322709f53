# Discrete input events delivered by the input collaborator
from enum import Enum


class InputEvent(Enum):
    MOVE_LEFT = "move-left"
    MOVE_RIGHT = "move-right"
    COLOR_UP = "increase-color"
    COLOR_DOWN = "decrease-color"
    CONFIRM = "confirm"
    CONFIRM_LONG = "confirm-long"  # reveal / hide the secret
    CANCEL = "cancel-short"  # pause, or quit while paused
    CANCEL_LONG = "cancel-long"  # quit
