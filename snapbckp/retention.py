# -*- coding: utf-8 -*-
import importlib
import logging
from .constants import ERR_EVALUATOR_IMPORT, ERR_EVALUATOR_TARGET
from .exceptions import ConfigError


logger = logging.getLogger(__name__)


class RetentionEvaluator(object):
    """Decides which snapshots fall outside the retention policy."""
    def evaluate(self, now, windows, snapshots):
        """Returns the snapshots that should be deleted.

        Must not touch the remote host or modify its arguments.

        :param now: Aware datetime the policy is evaluated against.
        :param windows: Ordered list of ``timedelta`` windows.
        :param snapshots: List of ``SnapshotEntry``.
        :return: List of ``SnapshotEntry`` taken from ``snapshots``.
        """
        raise NotImplementedError


class FunctionEvaluator(RetentionEvaluator):
    """Wraps a plain ``func(now, windows, snapshots)`` as an evaluator."""
    def __init__(self, func):
        self.func = func

    def evaluate(self, now, windows, snapshots):
        return list(self.func(now, windows, snapshots))


class KeepAllEvaluator(RetentionEvaluator):
    """Marks nothing for deletion.

    Used when no evaluator is configured, so a cycle never deletes snapshots
    by accident.
    """
    def evaluate(self, now, windows, snapshots):
        logger.info("no retention evaluator configured, keeping %d snapshots",
                    len(snapshots))
        return []


def load_evaluator(target):
    """Imports an evaluator given as ``package.module:name``.

    ``name`` may be a ``RetentionEvaluator`` subclass (instantiated without
    arguments), an evaluator instance or a plain function with the
    ``evaluate`` signature.

    :raises: ConfigError
    """
    module_name, sep, attr = target.partition(':')
    if not sep or not module_name or not attr:
        raise ConfigError(ERR_EVALUATOR_TARGET.format(target))

    try:
        obj = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise ConfigError(ERR_EVALUATOR_IMPORT.format(target, e)) from e

    if isinstance(obj, type) and issubclass(obj, RetentionEvaluator):
        return obj()
    if isinstance(obj, RetentionEvaluator):
        return obj
    if callable(obj):
        return FunctionEvaluator(obj)

    raise ConfigError(ERR_EVALUATOR_TARGET.format(target))
