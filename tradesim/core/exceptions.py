"""
Custom exceptions for the market simulator.
"""


class TradeSimError(Exception):
    """Base exception for the simulator"""
    pass


class InsufficientFundsError(TradeSimError):
    """Raised when a buy would drive the cash balance negative"""
    def __init__(self, required: float, available: float):
        self.required = required
        self.available = available
        super().__init__(f"Insufficient funds: need ${required:.2f}, have ${available:.2f}")


class InsufficientHoldingsError(TradeSimError):
    """Raised when attempting to sell more units than are held"""
    def __init__(self, instrument_id: str, requested: float, available: float):
        self.instrument_id = instrument_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient holdings of {instrument_id}: need {requested:g}, have {available:g}"
        )


class InvalidOrderError(TradeSimError):
    """Raised for invalid order parameters"""
    pass


class UnknownInstrumentError(TradeSimError):
    """Raised when an instrument id is not part of the catalog"""
    def __init__(self, instrument_id: str):
        self.instrument_id = instrument_id
        super().__init__(f"Unknown instrument: {instrument_id}")


class InvalidAlertError(TradeSimError):
    """Raised for a non-positive alert price or an unknown condition"""
    pass


class InvalidBotConfigError(TradeSimError):
    """Raised for unrecognised bot parameters"""
    pass


class ConfigurationError(TradeSimError):
    """Raised when simulation settings cannot be loaded or are invalid"""
    pass
