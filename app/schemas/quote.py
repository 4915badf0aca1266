from pydantic import BaseModel, ConfigDict


class QuoteRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    name: str
    price: float
    change: float
    change_pct: float
    volume: int
    market_cap: str


class DisplayedQuote(QuoteRecord):
    last_updated: str

    @classmethod
    def stamp(cls, record: QuoteRecord, last_updated: str) -> "DisplayedQuote":
        return cls(**record.model_dump(), last_updated=last_updated)
