"""Exceptions raised at the edges of the meeting scheduler."""


class MeetingSchedulerError(Exception):
    """Base exception for meeting scheduler errors."""


class ConfigError(MeetingSchedulerError):
    """Settings failed validation."""


class RosterError(MeetingSchedulerError):
    """Roster file could not be read or contains bad rows."""


class InvalidDateError(MeetingSchedulerError):
    """A date string is not in YYYY-MM-DD form."""


class InvalidStatusError(MeetingSchedulerError):
    """An attendance value is not one of the known statuses."""


class UnknownPolicyError(MeetingSchedulerError):
    """No priority policy is registered under the requested name."""
