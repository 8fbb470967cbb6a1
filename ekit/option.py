"""Functional options: callables that configure a target object."""


def apply(target, *args):
    """Call each option in ``args`` on ``target``, in order.

    An option that raises stops the chain; the exception propagates and the
    remaining options are not applied.
    """
    for option in args:
        option(target)