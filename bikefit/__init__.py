"""BikeFit cockpit engine - stem, spacer and bar reach recommendations."""

__version__ = "1.0.0"
