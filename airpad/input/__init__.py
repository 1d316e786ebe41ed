"""Host pointer abstraction, coordinate translation and injection."""

from airpad.input.backend import HostPointer, HostPointerError
from airpad.input.factory import hostPointer_create
from airpad.input.injector import InjectionError, InputInjector
from airpad.input.translator import CoordinateTranslator, DisplayUnavailableError

__all__ = [
    "CoordinateTranslator",
    "DisplayUnavailableError",
    "HostPointer",
    "HostPointerError",
    "InjectionError",
    "InputInjector",
    "hostPointer_create",
]
