from pydantic import BaseModel, Field

from app.schemas.quote import DisplayedQuote


class DashboardState(BaseModel):
    watchlist: list[str] = Field(default_factory=list)
    stocks: list[DisplayedQuote] = Field(default_factory=list)
    search_query: str = ""
    selected_stock: DisplayedQuote | None = None
    loading: bool = False
    error: str = ""
    last_updated: str | None = None


class SearchRequest(BaseModel):
    query: str | None = None


class SearchQueryUpdate(BaseModel):
    query: str
