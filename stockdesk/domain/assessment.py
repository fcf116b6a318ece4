"""Assessment domain models.

Typed form of the advisory service's JSON answer. Field names are
snake_case in Python and camelCase on the wire (``entryPoint.entryLow``,
``sellSentiment.stopLoss``...). Instances are frozen: an assessment never
changes after it is stored.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator
from pydantic.alias_generators import to_camel


class Rating(str, Enum):
    """Overall rating, ordered from most bullish to most bearish."""
    STRONG_BUY = "STRONG BUY"
    BUY = "BUY"
    HOLD = "HOLD"
    SELL = "SELL"
    STRONG_SELL = "STRONG SELL"

    @property
    def level(self) -> int:
        """5 for STRONG BUY down to 1 for STRONG SELL."""
        return _RATING_LEVELS[self]


_RATING_LEVELS = {
    Rating.STRONG_BUY: 5,
    Rating.BUY: 4,
    Rating.HOLD: 3,
    Rating.SELL: 2,
    Rating.STRONG_SELL: 1,
}


class EntryUrgency(str, Enum):
    """How soon the assessment suggests opening a position."""
    IMMEDIATE = "IMMEDIATE"
    PATIENT = "PATIENT"
    WAIT = "WAIT"

    @property
    def label(self) -> str:
        return {
            EntryUrgency.IMMEDIATE: "ENTER NOW",
            EntryUrgency.PATIENT: "PATIENT ENTRY",
            EntryUrgency.WAIT: "WAIT FOR DIP",
        }[self]


class SellSignal(str, Enum):
    """Sell-side guidance for an existing position."""
    HOLD = "HOLD"
    TRIM = "TRIM"
    SELL = "SELL"
    URGENT_SELL = "URGENT SELL"

    @property
    def label(self) -> str:
        return {
            SellSignal.HOLD: "HOLD POSITION",
            SellSignal.TRIM: "TRIM POSITION",
            SellSignal.SELL: "CONSIDER SELLING",
            SellSignal.URGENT_SELL: "EXIT NOW",
        }[self]

    @property
    def is_exit(self) -> bool:
        return self in (SellSignal.SELL, SellSignal.URGENT_SELL)


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        use_enum_values=False,
    )


class EntryPoint(_WireModel):
    """Where and when to open a position."""
    ideal_entry: float
    entry_low: float
    entry_high: float
    entry_rationale: str = ""
    entry_condition: str = ""
    urgency: EntryUrgency

    @model_validator(mode="after")
    def _check_zone(self) -> EntryPoint:
        if self.entry_low > self.entry_high:
            raise ValueError(
                f"entryLow {self.entry_low} is above entryHigh {self.entry_high}"
            )
        return self

    @computed_field
    @property
    def urgency_label(self) -> str:
        return self.urgency.label

    def contains(self, price: float) -> bool:
        """Inclusive entry-zone membership."""
        return self.entry_low <= price <= self.entry_high


class HoldStrategy(_WireModel):
    """How long to hold and what should prompt a review."""
    minimum_hold: str = ""
    optimal_hold: str = ""
    hold_rationale: str = ""
    review_triggers: list[str] = Field(default_factory=list)
    position_sizing: str = ""


class SellSentiment(_WireModel):
    """Exit levels and the current sell-side view."""
    sell_signal: SellSignal
    sell_trigger_price: float
    stop_loss: float
    profit_target: float
    sell_rationale: str = ""
    red_flags: list[str] = Field(default_factory=list)
    current_sentiment: str = ""

    @computed_field
    @property
    def sell_signal_label(self) -> str:
        return self.sell_signal.label


class Assessment(_WireModel):
    """A complete investment assessment for one ticker."""
    rating: Rating
    target_price: float
    upside_pct: float = Field(..., alias="updownside", description="Percent upside (negative for downside)")
    thesis: str = ""
    bull_case: str = ""
    bear_case: str = ""
    key_risks: list[str] = Field(default_factory=list)
    catalysts: list[str] = Field(default_factory=list)
    technical_outlook: str = ""
    analyst_consensus: str = ""
    entry_point: EntryPoint
    hold_strategy: HoldStrategy
    sell_sentiment: SellSentiment
