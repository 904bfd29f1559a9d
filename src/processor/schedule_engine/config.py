from dataclasses import dataclass


@dataclass(frozen=True)
class ParserConfig:
    """
    Tunable constants of the positional and flat-line parsers.

    All distances are in normalized image units.
    """

    row_tolerance: float = 0.02
    # Slack so that a centre difference of exactly row_tolerance still merges.
    row_tolerance_epsilon: float = 1e-9
    right_edge_epsilon: float = 0.002

    above_lookback: int = 2
    below_lookahead: int = 6
    flat_window: int = 8

    placeholder_title: str = "Занятие"

    def validate(self) -> None:
        if not (0.0 <= self.row_tolerance <= 1.0):
            raise ValueError("row_tolerance must be within [0, 1]")
        if self.row_tolerance_epsilon < 0:
            raise ValueError("row_tolerance_epsilon must be >= 0")
        if not (0.0 <= self.right_edge_epsilon <= 1.0):
            raise ValueError("right_edge_epsilon must be within [0, 1]")
        if self.above_lookback < 0:
            raise ValueError("above_lookback must be >= 0")
        if self.below_lookahead < 0:
            raise ValueError("below_lookahead must be >= 0")
        if self.flat_window < 0:
            raise ValueError("flat_window must be >= 0")
        if not self.placeholder_title.strip():
            raise ValueError("placeholder_title must not be empty")

    def __post_init__(self) -> None:
        self.validate()
