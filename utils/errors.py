class CareerCoachError(Exception):
    """Base class for errors raised by the consultation service"""


class StoreUnavailable(CareerCoachError):
    """A read or write against the backing store failed"""


class InvalidInput(CareerCoachError):
    """The outgoing message was empty or whitespace only"""


class NoActiveProfile(CareerCoachError):
    """The operation needs an owner identity and none was supplied"""
