"""
Construction hooks for the objects a Reader produces.

Each role (account, contra account, statement, transaction, opening balance,
closing balance) is built by a hook. A hook is either a class implementing
the role's interface, which is checked when the hook is set, or any callable,
whose result is checked every time it is invoked. Hooks may return ``SKIP``
to leave an object out of the result.

Arguments passed to a hook, per role:

    account           (number,)
    contra_account    (number,)
    statement         (account, number)
    transaction       ()
    opening_balance   ()
    closing_balance   ()
"""

from typing import Any, Callable, Dict, Union

from openmt940.exceptions import ConfigurationError, HookError
from openmt940.models import (
    Account,
    AccountInterface,
    Balance,
    BalanceInterface,
    Statement,
    StatementInterface,
    Transaction,
    TransactionInterface,
)


class _Skip:
    """
    Returned by a construction hook to drop the object it was asked for.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SKIP"

    def __bool__(self) -> bool:
        return False


SKIP = _Skip()

Hook = Union[type, Callable[..., Any]]

ROLE_INTERFACES: Dict[str, type] = {
    "account": AccountInterface,
    "contra_account": AccountInterface,
    "statement": StatementInterface,
    "transaction": TransactionInterface,
    "opening_balance": BalanceInterface,
    "closing_balance": BalanceInterface,
}

DEFAULT_HOOKS: Dict[str, type] = {
    "account": Account,
    "contra_account": Account,
    "statement": Statement,
    "transaction": Transaction,
    "opening_balance": Balance,
    "closing_balance": Balance,
}


class ObjectFactory:
    """
    Holds one construction hook per role and builds objects through them.
    """

    def __init__(self) -> None:
        self._hooks: Dict[str, Hook] = dict(DEFAULT_HOOKS)

    def get_hook(self, role: str) -> Hook:
        self._check_role(role)
        return self._hooks[role]

    def set_hook(self, role: str, hook: Hook) -> None:
        """
        Replaces the hook for ``role``.

        Raises:
            ConfigurationError: If the role is unknown, the hook is a class that
                does not implement the role's interface, or it is not callable.
        """
        self._check_role(role)
        interface = ROLE_INTERFACES[role]

        if isinstance(hook, type):
            if not issubclass(hook, interface):
                raise ConfigurationError(
                    f"{hook.__name__} must implement {interface.__name__} to build {role} objects"
                )
        elif not callable(hook):
            raise ConfigurationError(
                f"The {role} hook must be a class or a callable, got {type(hook).__name__}"
            )

        self._hooks[role] = hook

    def create(self, role: str, *args: Any) -> Any:
        """
        Builds an object for ``role``, returning ``SKIP`` when the hook asks
        for the object to be left out.

        Raises:
            HookError: If the hook returned something other than ``SKIP`` or an
                object implementing the role's interface.
        """
        self._check_role(role)
        result = self._hooks[role](*args)
        if result is SKIP:
            return SKIP

        interface = ROLE_INTERFACES[role]
        if not isinstance(result, interface):
            raise HookError(role, result, interface)
        return result

    def create_account(self, number: str) -> Any:
        return self.create("account", number)

    def create_contra_account(self, number: Any) -> Any:
        return self.create("contra_account", number)

    def create_statement(self, account: AccountInterface, number: Any) -> Any:
        return self.create("statement", account, number)

    def create_transaction(self) -> Any:
        return self.create("transaction")

    def create_opening_balance(self) -> Any:
        return self.create("opening_balance")

    def create_closing_balance(self) -> Any:
        return self.create("closing_balance")

    @staticmethod
    def _check_role(role: str) -> None:
        if role not in ROLE_INTERFACES:
            raise ConfigurationError(
                f"Unknown role '{role}'. Expected one of: {', '.join(ROLE_INTERFACES)}"
            )
