# -*- mode: python; coding: utf-8 -*-
# Copyright 2015 Peter Williams <peter@newton.cx> and collaborators.
# Licensed under the MIT license.

"""Running summary statistics for an open-ended series of readings.

"""

__all__ = '''RunningAccumulator'''.split ()

import logging, math
from datetime import datetime, timezone

from . import GumError
from .mathlib import real_types

_log = logging.getLogger (__name__)

unknown_designation = '<unknown>'


def _utcnow ():
    return datetime.now (timezone.utc)


class RunningAccumulator (object):
    """Keeps the count, sum, extremes, and first and most recent values of a named
    stream of readings, along with when the first and most recent readings
    arrived. Nothing else is stored, so this is fine for arbitrarily long
    series.

    The value statistics are NaN until the first reading arrives.

    """
    def __init__ (self, designation=''):
        self._designation = (designation or '').strip () or unknown_designation
        self.restart ()


    def restart (self):
        self._count = 0
        self._sum = 0.
        self._maximum = -math.inf
        self._minimum = math.inf
        self._first_value = math.nan
        self._most_recent_value = math.nan
        self._first_date = self._most_recent_date = _utcnow ()


    def update (self, value, timestamp=None):
        """Record *value*. NaN readings are ignored. *timestamp* defaults to the
        current UTC time.

        """
        if not isinstance (value, real_types):
            raise GumError ('readings must be real numbers; got %r', value)

        value = float (value)
        if math.isnan (value):
            _log.debug ('%s: ignoring NaN reading', self._designation)
            return

        if timestamp is None:
            timestamp = _utcnow ()

        self._count += 1
        if self._count == 1:
            self._first_value = value
            self._first_date = timestamp

        self._most_recent_value = value
        self._most_recent_date = timestamp
        self._sum += value

        if value > self._maximum:
            self._maximum = value
        if value < self._minimum:
            self._minimum = value


    def _if_valid (self, value):
        if self._count <= 0:
            return math.nan
        return value

    @property
    def designation (self):
        return self._designation

    @property
    def count (self):
        return self._count

    @property
    def average_value (self):
        return self._if_valid (self._sum / max (self._count, 1))

    @property
    def scatter (self):
        "Half the range of the readings."
        return self._if_valid ((self._maximum - self._minimum) / 2)

    @property
    def central_value (self):
        "The midpoint of the range of the readings."
        return self._if_valid ((self._maximum + self._minimum) / 2)

    @property
    def maximum_value (self):
        return self._if_valid (self._maximum)

    @property
    def minimum_value (self):
        return self._if_valid (self._minimum)

    @property
    def first_value (self):
        return self._first_value

    @property
    def most_recent_value (self):
        return self._most_recent_value

    @property
    def first_date (self):
        return self._first_date

    @property
    def most_recent_date (self):
        return self._most_recent_date

    @property
    def duration (self):
        "Seconds between the first and most recent readings."
        return (self._most_recent_date - self._first_date).total_seconds ()


    def __str__ (self):
        if not self._count:
            return '%s : no data yet' % self._designation
        return '%s : %s ± %s' % (self._designation, self.average_value, self.scatter)

    def __repr__ (self):
        return str (self)
