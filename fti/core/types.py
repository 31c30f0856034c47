"""Response models for the Fan Token Intel API."""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator


def _skip_null_items(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, list):
        return [item for item in value if item is not None]
    return value


class ApiModel(BaseModel):
    """Lenient base for API payloads.

    Unknown fields are ignored and JSON nulls fall back to field defaults. A
    null body decodes to an all-default model, and null list items are skipped.
    """

    model_config = ConfigDict(
        extra="ignore", coerce_numbers_to_str=True, allow_inf_nan=False
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, dict):
            return {
                k: _skip_null_items(v) if isinstance(v, list) else v
                for k, v in data.items()
                if v is not None
            }
        return data


# Tokens


class TokenListItem(ApiModel):
    """Row of the token list endpoint."""

    symbol: str = Field(default="", description="Token symbol")
    name: str = Field(default="", description="Display name")
    team: str = Field(default="", description="Team name")
    price: float = Field(default=0.0, description="Price in USD")
    price_change_1h: float = Field(default=0.0, description="1h change (%)")
    price_change_24h: float = Field(default=0.0, description="24h change (%)")
    volume_24h: float = Field(default=0.0, description="24h volume in USD")
    market_cap: float = Field(default=0.0, description="Market cap in USD")
    health_grade: str = Field(default="", description="Health grade (A/B/C/...)")
    health_score: float = Field(default=0.0, description="Health score")


# Body of GET /api/tokens; null decodes to an empty list.
TokenList = Annotated[list[TokenListItem], BeforeValidator(_skip_null_items)]


class TokenInfo(ApiModel):
    """Static token metadata."""

    id: int = Field(default=0, description="Server-side token id")
    symbol: str = Field(default="", description="Token symbol")
    name: str = Field(default="", description="Display name")
    team: str = Field(default="", description="Team name")
    league: str = Field(default="", description="League")
    country: str = Field(default="", description="Country")
    total_supply: int = Field(default=0, description="Total supply")
    circulating_supply: int = Field(default=0, description="Circulating supply")
    launch_date: str = Field(default="", description="Launch date")


class TokenMetrics(ApiModel):
    """Market metrics attached to a single token snapshot."""

    price: float = 0.0
    price_change_1h: float = 0.0
    price_change_24h: float = 0.0
    price_change_7d: float = 0.0
    volume_24h: float = 0.0
    market_cap: float = 0.0
    total_holders: int = 0
    holder_change_24h: int = 0
    health_score: float = 0.0
    health_grade: str = ""
    liquidity_1pct: float = Field(default=0.0, description="Depth within 1% in USD")
    spread_bps: float = Field(default=0.0, description="Bid-ask spread in bps")


class ExchangeQuote(ApiModel):
    """Per-exchange market for a token."""

    name: str = ""
    price: float = 0.0
    volume_24h: float = 0.0
    spread_bps: float = 0.0
    best_bid: float = 0.0
    best_ask: float = 0.0


class TokenDetail(ApiModel):
    """Response of /api/tokens/{symbol}."""

    token: TokenInfo = Field(default_factory=TokenInfo)
    metrics: TokenMetrics = Field(default_factory=TokenMetrics)
    exchanges: list[ExchangeQuote] = Field(default_factory=list)


class PricePoint(ApiModel):
    """Single candle of price history."""

    time: str = ""
    price: float = 0.0
    volume: float = 0.0
    spread: float = 0.0
    liquidity: float = 0.0


class PriceHistory(ApiModel):
    """Response of /api/tokens/{symbol}/history."""

    symbol: str = ""
    period_hours: int = 0
    data_points: int = 0
    prices: list[PricePoint] = Field(default_factory=list)


# Signals


class ActiveSignal(ApiModel):
    """Trading signal that has not reached an outcome yet."""

    id: str = ""
    token: str = ""
    direction: str = Field(default="", description="long or short")
    tier: str = Field(default="", description="high, medium or other")
    sell_ratio: float = 0.0
    confidence_score: float = Field(default=0.0, description="Confidence in [0, 1]")
    entry_price: float = 0.0
    target_price: float = 0.0
    stop_price: float = 0.0
    created_at: str = ""
    expires_at: str = ""
    primary_reason: str = ""
    max_profit_pct: float = 0.0
    trailing_stop_status: str = ""


class ActiveSignals(ApiModel):
    """Response of /api/v1/signals/active."""

    active_signals: int = 0
    signals: list[ActiveSignal] = Field(default_factory=list)


class HistoricalSignal(ApiModel):
    """Signal with a terminal outcome."""

    id: str = ""
    token: str = ""
    tier: str = ""
    sell_ratio: float = 0.0
    confidence_score: float = 0.0
    entry_price: float = 0.0
    target_price: float = 0.0
    stop_price: float = 0.0
    outcome_status: str = Field(
        default="", description="target_hit, stopped_out, expired or other"
    )
    pnl_pct: float = 0.0
    max_profit_pct: float = 0.0
    created_at: str = ""
    exit_time: str = ""
    exit_price: float = 0.0


class SignalHistory(ApiModel):
    """Response of /api/v1/signals/history."""

    signals: list[HistoricalSignal] = Field(default_factory=list)


# Sports


class Match(ApiModel):
    """Upcoming fixture with fan token context."""

    match_id: str = ""
    home_team: str = ""
    away_team: str = ""
    match_date: str = ""
    competition: str = ""
    status: str = ""
    importance_score: float = 0.0
    home_token: str = ""
    away_token: str = ""


class UpcomingMatches(ApiModel):
    """Response of /api/matches/upcoming."""

    count: int = 0
    days: int = 0
    token_filter: str = ""
    matches: list[Match] = Field(default_factory=list)


# Whales


class WhaleTrade(ApiModel):
    """Large CEX or DEX trade."""

    time: str = ""
    venue: str = Field(default="", description="cex or dex")
    symbol: str = ""
    exchange: str = ""
    side: str = Field(default="", description="buy or sell")
    price: float = 0.0
    quantity: float = 0.0
    value_usd: float = 0.0
    is_aggressive: bool = False
    tx_hash: str = Field(default="", description="On-chain hash for DEX trades")


class WhaleTrades(ApiModel):
    """Response of /api/whales/combined."""

    transactions: list[WhaleTrade] = Field(default_factory=list)
    count: int = 0
    cex_count: int = 0
    dex_count: int = 0
    threshold_usd: float = 0.0
    timestamp: str = ""


# Auth


class RegistrationRequest(BaseModel):
    """Body of POST /api/v1/auth/register."""

    name: str
    email: str
    description: str = ""
    scope: str = "read"


class Registration(ApiModel):
    """Response of POST /api/v1/auth/register."""

    agent_id: str = ""
    api_key: str = ""
    name: str = ""
    tier: str = ""
    rate_limit_per_minute: int = 0
    email_verified: bool = False
    capabilities: list[str] = Field(default_factory=list)
    message: str = ""


class AccountInfo(ApiModel):
    """Response of GET /api/v1/auth/me."""

    agent_id: str = ""
    name: str = ""
    description: str = ""
    tier: str = ""
    capabilities: list[str] = Field(default_factory=list)
    rate_limit_per_minute: int = 0
    total_requests: int = 0
    created_at: str = ""
