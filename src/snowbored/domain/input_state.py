from dataclasses import dataclass


@dataclass(frozen=True)
class InputState:
    ascending: bool  # true while the ascend input is held
