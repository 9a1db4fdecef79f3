# randlib/errors.py


class RandlibError(Exception):
    pass


class EntropyUnavailable(RandlibError):
    """A seed source could not deliver its 128 bits."""


class SourceUnavailable(EntropyUnavailable):
    """The seed source is disabled in config or unsupported on this platform."""
