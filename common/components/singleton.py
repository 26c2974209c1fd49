"""
Shared service instances

Every service class extends Singleton, so `MailboxService()` anywhere in the process
returns the instance built by the first call. Calls with different arguments get their
own instance.
"""
from typing import Any, Dict, Tuple


def instance_key(args: tuple, kwargs: Dict[str, Any]) -> Tuple:
    """
    Cache key of a constructor call, keyword order does not matter
    """
    return args + tuple(sorted(kwargs.items()))


class _SingletonMeta(type):
    """
    Caches one instance per class and constructor arguments.
    Arguments must be hashable.
    """

    _instances: Dict[type, Dict[Tuple, Any]] = {}

    def __call__(cls, *args, **kwargs):
        cached = _SingletonMeta._instances.setdefault(cls, {})
        key = instance_key(args, kwargs)
        if key not in cached:
            cached[key] = super(_SingletonMeta, cls).__call__(*args, **kwargs)
        return cached[key]


class Singleton(metaclass=_SingletonMeta):

    @classmethod
    def reset_instances(cls):
        """
        Drop every cached instance of this class, so the next call builds a fresh one.
        Mostly used by tests that patch configuration.
        """
        _SingletonMeta._instances.pop(cls, None)

    @staticmethod
    def reset_all_instances():
        """Drop the cached instances of every service"""
        _SingletonMeta._instances.clear()
