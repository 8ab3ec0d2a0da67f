"""Fixed bot replies (Telegram Markdown)."""

from __future__ import annotations

WELCOME = (
    "Welcome to the Bitcoin Transaction Tracker Bot! \n\n"
    "Use the command /register to start receiving transaction alerts.\n"
)

HELP = (
    "📜 *Available Commands*\n\n"
    "/register - Register your Bitcoin wallet address\n"
    "/user - View your registered Bitcoin address\n"
    "/unregister - Remove your registered Bitcoin address\n"
    "/edit - Edit your registered Bitcoin address\n"
    "/gas - Check the current gas price\n"
    "/set\\_gas - Set a gas price threshold for alerts\n"
    "/remove\\_gas - Remove your gas price threshold\n"
    "/rune - Check your Rune balances\n"
    "/brc20 - Check your BRC20 token balances\n"
    "/ordinals - Check Ordinals (Coming Soon)"
)

ALREADY_REGISTERED = "⚠️ You have already registered your wallet!"
NOT_REGISTERED = "⚠️ You have not registered a Bitcoin address yet. Use /register to register."
NOT_REGISTERED_FOR_THRESHOLD = "⚠️ You have not registered your wallet yet!"
NOT_REGISTERED_FOR_UNREGISTER = "⚠️ You are not registered. Use /register to register your address."
NOT_REGISTERED_FOR_BALANCES = "⚠️ You have not registered a Bitcoin address yet. Please use /register to register."

INVALID_ADDRESS_REGISTER = "⚠️ Invalid Bitcoin address. Please send again."
INVALID_ADDRESS_EDIT = "⚠️ Invalid Bitcoin address. Please send a valid address."
INVALID_THRESHOLD = "⚠️ Invalid gas price threshold (must be an integer). Please send again."

TIMEOUT_ADDRESS = "⌛ Timeout: You didn’t provide your Bitcoin address in time. Please try again."
TIMEOUT_EDIT = "⌛ Timeout: You didn’t provide the new address in time. Please try again later."
TIMEOUT_THRESHOLD = "⌛ Timeout: You didn’t provide a gas price threshold in time. Please try again later."

NO_THRESHOLD = "⚠️ You have not set a gas price threshold yet."
THRESHOLD_REMOVED = "🗑 Your gas price threshold has been removed. You will no longer receive gas alerts!"
UNREGISTERED = "🗑️ Your Bitcoin wallet address has been unregistered."

GAS_FAILED = "⚠️ Failed to fetch the current gas price. Please try again later."
RUNE_FAILED = "⚠️ Failed to fetch rune balances. Please try again later."
BRC20_FAILED = "⚠️ Failed to fetch BRC20 token balances. Please try again later."
ORDINALS_SOON = "🛠️ The Ordinals feature is coming soon! Stay tuned!"


def _minutes(timeout_seconds: float) -> str:
    minutes = max(1, round(timeout_seconds / 60))
    return f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"


def prompt_address(timeout_seconds: float) -> str:
    return f"💳 Please send your Bitcoin wallet address (Timeout in {_minutes(timeout_seconds)}):"


def prompt_edit(timeout_seconds: float) -> str:
    return f"✏️ Please send your new Bitcoin wallet address (Timeout in {_minutes(timeout_seconds)}):"


def prompt_threshold(timeout_seconds: float) -> str:
    return f"🖊 Please send your preferred gas price threshold (Timeout in {_minutes(timeout_seconds)}):"


def registered(address: str) -> str:
    return f"💳 Your Bitcoin wallet {address} has been registered!\n\nYou will now receive transaction alerts."


def address_updated(address: str) -> str:
    return f"💳 Your Bitcoin wallet address has been updated to: {address}"


def threshold_set(threshold: int) -> str:
    return f"⛽️ Your gas price threshold has been set to: {threshold} sat/vB"


def registered_address(address: str) -> str:
    return f"💳 Your registered Bitcoin address is: {address}"
