"""Function key sequences and iTerm2 key label escape codes."""

from __future__ import annotations

# F1-F12 followed by Shift-F1..F8, as zsh sees them.
FN_KEYS = [
    "^[OP",
    "^[OQ",
    "^[OR",
    "^[OS",
    "^[[15~",
    "^[[17~",
    "^[[18~",
    "^[[19~",
    "^[[20~",
    "^[[21~",
    "^[[23~",
    "^[[24~",
    "^[[1;2P",
    "^[[1;2Q",
    "^[[1;2R",
    "^[[1;2S",
    "^[[15:2~",
    "^[[17:2~",
    "^[[18:2~",
    "^[[19:2~",
]

SLOT_COUNT = len(FN_KEYS)

ESC = "\033"
BEL = "\a"


def key_sequence(slot: int) -> str:
    if not 1 <= slot <= SLOT_COUNT:
        raise ValueError(f"slot out of range: {slot}")
    return FN_KEYS[slot - 1]


def clean_label(text: str) -> str:
    # Labels travel inside an OSC sequence and a single shell line.
    return " ".join(str(text).replace(BEL, "").replace(ESC, "").split())


def set_label_sequence(slot: int, text: str) -> str:
    key_sequence(slot)
    return f"{ESC}]1337;SetKeyLabel=F{slot}={clean_label(text)}{BEL}"


def pop_labels_sequence() -> str:
    return f"{ESC}]1337;PopKeyLabels{BEL}"
