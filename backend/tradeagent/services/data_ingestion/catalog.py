"""
Symbol Catalog

Fixed lists of tracked assets, grouped into the four buckets served by the
stocks action, plus the default CoinGecko id list.

Indian equities carry the NSE market suffix (.NS) which is kept for the
upstream query and stripped for display.
"""

from typing import Optional

from tradeagent.schemas.market import AssetType, SymbolDescriptor

GLOBAL_STOCKS = [
    {"symbol": "AAPL", "name": "Apple"},
    {"symbol": "MSFT", "name": "Microsoft"},
    {"symbol": "NVDA", "name": "Nvidia"},
    {"symbol": "AMZN", "name": "Amazon"},
    {"symbol": "GOOGL", "name": "Alphabet (Google)"},
    {"symbol": "TSLA", "name": "Tesla"},
    {"symbol": "META", "name": "Meta Platforms"},
    {"symbol": "NFLX", "name": "Netflix"},
    {"symbol": "AMD", "name": "AMD"},
    {"symbol": "INTC", "name": "Intel"},
    {"symbol": "JPM", "name": "JPMorgan Chase"},
    {"symbol": "V", "name": "Visa"},
    {"symbol": "WMT", "name": "Walmart"},
    {"symbol": "JNJ", "name": "Johnson & Johnson"},
    {"symbol": "PG", "name": "Procter & Gamble"},
    {"symbol": "MA", "name": "Mastercard"},
    {"symbol": "UNH", "name": "UnitedHealth"},
    {"symbol": "HD", "name": "Home Depot"},
    {"symbol": "DIS", "name": "Walt Disney"},
    {"symbol": "BAC", "name": "Bank of America"},
    {"symbol": "CRM", "name": "Salesforce"},
    {"symbol": "ADBE", "name": "Adobe"},
    {"symbol": "ORCL", "name": "Oracle"},
    {"symbol": "CSCO", "name": "Cisco"},
    {"symbol": "PEP", "name": "PepsiCo"},
    {"symbol": "KO", "name": "Coca-Cola"},
    {"symbol": "AVGO", "name": "Broadcom"},
    {"symbol": "MRK", "name": "Merck"},
    {"symbol": "NKE", "name": "Nike"},
    {"symbol": "PYPL", "name": "PayPal"},
    {"symbol": "QCOM", "name": "Qualcomm"},
    {"symbol": "TXN", "name": "Texas Instruments"},
    {"symbol": "IBM", "name": "IBM"},
    {"symbol": "GS", "name": "Goldman Sachs"},
    {"symbol": "MS", "name": "Morgan Stanley"},
    {"symbol": "AXP", "name": "American Express"},
    {"symbol": "SBUX", "name": "Starbucks"},
    {"symbol": "CVX", "name": "Chevron"},
    {"symbol": "XOM", "name": "ExxonMobil"},
    {"symbol": "LLY", "name": "Eli Lilly"},
    {"symbol": "ABBV", "name": "AbbVie"},
    {"symbol": "TMO", "name": "Thermo Fisher"},
    {"symbol": "NOW", "name": "ServiceNow"},
    {"symbol": "UBER", "name": "Uber"},
    {"symbol": "ABNB", "name": "Airbnb"},
    {"symbol": "SPOT", "name": "Spotify"},
    {"symbol": "COIN", "name": "Coinbase"},
    {"symbol": "PLTR", "name": "Palantir"},
    {"symbol": "NET", "name": "Cloudflare"},
    {"symbol": "CRWD", "name": "CrowdStrike"},
]

INDIAN_STOCKS = [
    {"symbol": "RELIANCE.NS", "name": "Reliance Industries"},
    {"symbol": "TCS.NS", "name": "TCS"},
    {"symbol": "INFY.NS", "name": "Infosys"},
    {"symbol": "HDFCBANK.NS", "name": "HDFC Bank"},
    {"symbol": "ICICIBANK.NS", "name": "ICICI Bank"},
    {"symbol": "SBIN.NS", "name": "SBI"},
    {"symbol": "LT.NS", "name": "Larsen & Toubro"},
    {"symbol": "ITC.NS", "name": "ITC"},
    {"symbol": "AXISBANK.NS", "name": "Axis Bank"},
    {"symbol": "KOTAKBANK.NS", "name": "Kotak Mahindra Bank"},
    {"symbol": "BAJFINANCE.NS", "name": "Bajaj Finance"},
    {"symbol": "MARUTI.NS", "name": "Maruti Suzuki"},
    {"symbol": "HCLTECH.NS", "name": "HCL Technologies"},
    {"symbol": "WIPRO.NS", "name": "Wipro"},
    {"symbol": "SUNPHARMA.NS", "name": "Sun Pharma"},
    {"symbol": "TITAN.NS", "name": "Titan Company"},
    {"symbol": "BHARTIARTL.NS", "name": "Bharti Airtel"},
    {"symbol": "ADANIENT.NS", "name": "Adani Enterprises"},
    {"symbol": "TATAMOTORS.NS", "name": "Tata Motors"},
    {"symbol": "TATASTEEL.NS", "name": "Tata Steel"},
    {"symbol": "POWERGRID.NS", "name": "Power Grid Corp"},
    {"symbol": "NTPC.NS", "name": "NTPC"},
    {"symbol": "HINDALCO.NS", "name": "Hindalco"},
    {"symbol": "ULTRACEMCO.NS", "name": "UltraTech Cement"},
    {"symbol": "TECHM.NS", "name": "Tech Mahindra"},
    {"symbol": "ASIANPAINT.NS", "name": "Asian Paints"},
    {"symbol": "BAJAJFINSV.NS", "name": "Bajaj Finserv"},
    {"symbol": "ONGC.NS", "name": "ONGC"},
    {"symbol": "COALINDIA.NS", "name": "Coal India"},
    {"symbol": "DRREDDY.NS", "name": "Dr. Reddy's"},
    {"symbol": "DIVISLAB.NS", "name": "Divi's Laboratories"},
    {"symbol": "CIPLA.NS", "name": "Cipla"},
    {"symbol": "APOLLOHOSP.NS", "name": "Apollo Hospitals"},
    {"symbol": "EICHERMOT.NS", "name": "Eicher Motors"},
    {"symbol": "NESTLEIND.NS", "name": "Nestle India"},
    {"symbol": "HEROMOTOCO.NS", "name": "Hero MotoCorp"},
    {"symbol": "BRITANNIA.NS", "name": "Britannia"},
    {"symbol": "INDUSINDBK.NS", "name": "IndusInd Bank"},
    {"symbol": "HINDUNILVR.NS", "name": "Hindustan Unilever"},
    {"symbol": "GRASIM.NS", "name": "Grasim Industries"},
    {"symbol": "JSWSTEEL.NS", "name": "JSW Steel"},
    {"symbol": "VEDL.NS", "name": "Vedanta"},
    {"symbol": "TATAPOWER.NS", "name": "Tata Power"},
    {"symbol": "ZOMATO.NS", "name": "Zomato"},
    {"symbol": "PAYTM.NS", "name": "Paytm (One97)"},
]

GLOBAL_INDICES = [
    # Indian
    {"symbol": "^NSEI", "name": "Nifty 50", "currency": "INR"},
    {"symbol": "^BSESN", "name": "BSE Sensex", "currency": "INR"},
    # US
    {"symbol": "^GSPC", "name": "S&P 500", "currency": "USD"},
    {"symbol": "^DJI", "name": "Dow Jones", "currency": "USD"},
    {"symbol": "^IXIC", "name": "NASDAQ Composite", "currency": "USD"},
    {"symbol": "^RUT", "name": "Russell 2000", "currency": "USD"},
    # Europe
    {"symbol": "^FTSE", "name": "FTSE 100", "currency": "GBP"},
    {"symbol": "^GDAXI", "name": "DAX", "currency": "EUR"},
    {"symbol": "^FCHI", "name": "CAC 40", "currency": "EUR"},
    {"symbol": "^STOXX50E", "name": "Euro Stoxx 50", "currency": "EUR"},
    {"symbol": "^IBEX", "name": "IBEX 35", "currency": "EUR"},
    # Asia-Pacific
    {"symbol": "^N225", "name": "Nikkei 225", "currency": "JPY"},
    {"symbol": "^HSI", "name": "Hang Seng", "currency": "HKD"},
    {"symbol": "000001.SS", "name": "Shanghai Composite", "currency": "CNY"},
    {"symbol": "^KS11", "name": "KOSPI", "currency": "KRW"},
    {"symbol": "^STI", "name": "Straits Times", "currency": "SGD"},
    {"symbol": "^AXJO", "name": "ASX 200", "currency": "AUD"},
    {"symbol": "^TWII", "name": "TAIEX", "currency": "TWD"},
    {"symbol": "^JKSE", "name": "Jakarta Composite", "currency": "IDR"},
    {"symbol": "^KLSE", "name": "KLCI", "currency": "MYR"},
    {"symbol": "^NZ50", "name": "NZX 50", "currency": "NZD"},
    # Americas
    {"symbol": "^BVSP", "name": "Bovespa", "currency": "BRL"},
    {"symbol": "^MXX", "name": "IPC Mexico", "currency": "MXN"},
    {"symbol": "^GSPTSE", "name": "TSX Composite", "currency": "CAD"},
]

# Commodities - prices in USD
COMMODITIES = [
    {"symbol": "GC=F", "name": "Gold", "currency": "USD"},
    {"symbol": "SI=F", "name": "Silver", "currency": "USD"},
    {"symbol": "CL=F", "name": "Crude Oil (WTI)", "currency": "USD"},
]

CRYPTO_IDS = [
    "bitcoin", "ethereum", "solana", "ripple", "cardano", "dogecoin",
    "polkadot", "avalanche-2", "chainlink", "polygon-ecosystem-token",
    "tron", "shiba-inu", "litecoin", "uniswap", "cosmos",
    "stellar", "near", "internet-computer", "aptos", "sui",
    "arbitrum", "optimism", "filecoin", "hedera-hashgraph", "vechain",
    "aave", "the-graph", "render-token", "injective-protocol", "fantom",
    "pepe", "bonk", "floki", "sei-network", "celestia",
    "stacks", "maker", "theta-token", "lido-dao", "mantle",
]

INDIAN_SUFFIXES = (".NS", ".BO")


def _descriptors(entries: list[dict], asset_type: AssetType) -> list[SymbolDescriptor]:
    return [SymbolDescriptor(type=asset_type, **entry) for entry in entries]


STOCK_BUCKETS: dict[str, list[SymbolDescriptor]] = {
    "global": _descriptors(GLOBAL_STOCKS, AssetType.STOCK),
    "indian": _descriptors(INDIAN_STOCKS, AssetType.STOCK),
    "indices": _descriptors(GLOBAL_INDICES, AssetType.INDEX),
    "commodities": _descriptors(COMMODITIES, AssetType.COMMODITY),
}

# Index/commodity symbol -> display name and home currency
_NAMED_SYMBOLS = {d.symbol: d for d in STOCK_BUCKETS["indices"] + STOCK_BUCKETS["commodities"]}


def is_crypto_id(symbol: Optional[str]) -> bool:
    """True if symbol is one of the tracked CoinGecko ids."""
    return bool(symbol) and symbol.lower() in CRYPTO_IDS


def upstream_symbol(symbol: str) -> str:
    """Canonical upstream form: uppercase, URL-encoded caret decoded."""
    return symbol.strip().upper().replace("%5E", "^")


def display_symbol(raw_symbol: str) -> str:
    """
    Human-facing symbol.

    Indices and commodities display their catalog name; Indian equities
    drop the market suffix.
    """
    symbol = upstream_symbol(raw_symbol)
    if symbol in _NAMED_SYMBOLS:
        return _NAMED_SYMBOLS[symbol].name
    for suffix in INDIAN_SUFFIXES:
        if symbol.endswith(suffix):
            return symbol[: -len(suffix)]
    return symbol


def static_currency(symbol: str) -> Optional[str]:
    """Known home currency for index/commodity/Indian symbols."""
    symbol = upstream_symbol(symbol)
    if symbol in _NAMED_SYMBOLS:
        return _NAMED_SYMBOLS[symbol].currency
    if symbol.endswith(INDIAN_SUFFIXES):
        return "INR"
    return None
