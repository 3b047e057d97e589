"""Trading protocol decoders, FIX message tools, an order book simulator and a tape checker."""

__version__ = "0.1.0"