# immutableui/errors.py
"""
Error taxonomy for the reconciliation engine.

The core never catches or retries these. An error raised half-way through an
``apply`` leaves the target with the members processed so far already updated.
"""


class ImmutableUIError(Exception):
    """Base class for every error raised by immutableui."""


class UnsupportedCreate(ImmutableUIError):
    """
    Raised when ``create()`` is invoked on a description whose target type is
    abstract or has no zero-argument constructor.

    :param target_type: The type that could not be instantiated.
    """
    def __init__(self, target_type: type):
        self.target_type = target_type
        super().__init__(f"can't create {_type_name(target_type)}")


class TypeMismatch(ImmutableUIError):
    """
    Raised when a previous description, a new description and a live target
    disagree on type, or when an attribute holds a value of the wrong type.
    """


class MissingMember(ImmutableUIError):
    """
    Raised at bind time when a bound member name has no counterpart on the
    target class. Never raised while applying a description.

    :param target_type: The class being bound.
    :param member_name: The member that could not be found.
    """
    def __init__(self, target_type: type, member_name: str):
        self.target_type = target_type
        self.member_name = member_name
        super().__init__(f"Could not find member `{member_name}` on {_type_name(target_type)}")


def _type_name(tp) -> str:
    module = getattr(tp, "__module__", None)
    name = getattr(tp, "__qualname__", None) or repr(tp)
    if module and module != "builtins":
        return f"{module}.{name}"
    return name
