# -*- coding: utf-8 -*-
import datetime
from .constants import ERR_POLICY_NOT_INTEGER, ERR_POLICY_UNKNOWN_KEYS
from .exceptions import ConfigError, DurationConversionError


class RetentionWindow(object):
    """One entry of the retention policy.

    All components are optional and add up, so ``{"days": 1, "hours": 12}``
    is a window of 36 hours.
    """
    UNITS = ('minutes', 'hours', 'days', 'weeks')

    def __init__(self, minutes=None, hours=None, days=None, weeks=None):
        self.minutes = minutes
        self.hours = hours
        self.days = days
        self.weeks = weeks

    @classmethod
    def from_minutes(cls, minutes):
        return cls(minutes=minutes)

    @classmethod
    def from_hours(cls, hours):
        return cls(hours=hours)

    @classmethod
    def from_days(cls, days):
        return cls(days=days)

    @classmethod
    def from_weeks(cls, weeks):
        return cls(weeks=weeks)

    @classmethod
    def from_dict(cls, data):
        """Builds a window from a policy entry of the configuration file.

        :raises: ConfigError
        """
        unknown = sorted(set(data) - set(cls.UNITS))
        if unknown:
            raise ConfigError(
                ERR_POLICY_UNKNOWN_KEYS.format(data, ', '.join(unknown)))

        for unit in cls.UNITS:
            value = data.get(unit)
            # bool is an int subclass but never a sensible amount.
            if value is not None and (
                    isinstance(value, bool) or not isinstance(value, int)):
                raise ConfigError(ERR_POLICY_NOT_INTEGER.format(data, unit))

        return cls(**data)

    def to_timedelta(self):
        """Sums all present components.

        :raises: DurationConversionError if the sum overflows ``timedelta``.
        """
        total = datetime.timedelta(0)
        try:
            for unit in self.UNITS:
                value = getattr(self, unit)
                if value is not None:
                    total += datetime.timedelta(**{unit: value})
        except OverflowError:
            raise DurationConversionError(self) from None

        return total

    def __eq__(self, other):
        if not isinstance(other, RetentionWindow):
            return NotImplemented
        return all(getattr(self, u) == getattr(other, u) for u in self.UNITS)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self):
        parts = ['{}={}'.format(u, getattr(self, u)) for u in self.UNITS
                 if getattr(self, u) is not None]
        return 'RetentionWindow({})'.format(', '.join(parts))


def windows_to_timedeltas(policy):
    """Converts a whole policy, keeping its order."""
    return [window.to_timedelta() for window in policy]
