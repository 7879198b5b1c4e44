"""auctiondash - auction property and renovation profitability tracker."""

__version__ = "0.1.0"
