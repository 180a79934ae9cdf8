"""
Logging for numdist.

Loggers:
--------

- :py:attr:`mylog`: the package logger. A :py:class:`logging.NullHandler` is attached so
  that output is left to the application; enable it with e.g. ``logging.basicConfig``.

Conventions for :py:attr:`mylog`:

- ``DEBUG``: construction details (support, normalization, backend choice, FFT lengths).
- ``WARNING``: numerical conditions the user should know about, mirrored as
  :py:class:`~numdist.exceptions.NumericalInstabilityWarning`.
"""
import logging
import warnings

from numdist.exceptions import NumericalInstabilityWarning

mylog: logging.Logger = logging.getLogger("numdist")
mylog.addHandler(logging.NullHandler())


def warn_numerical(message: str, *args) -> None:
    """Log ``message % args`` at WARNING level and issue it as a NumericalInstabilityWarning."""
    mylog.warning(message, *args)
    warnings.warn(message % args if args else message, NumericalInstabilityWarning, stacklevel=3)
