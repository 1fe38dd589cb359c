import logging
from collections import OrderedDict
from typing import Dict, List, Mapping, Optional, Tuple, Union

from openmt940.assembler import StatementAssembler
from openmt940.dialects import DialectPolicy, default_dialects
from openmt940.exceptions import ConfigurationError, NoSuitableDialectError
from openmt940.factory import Hook, ObjectFactory
from openmt940.models import StatementInterface

logger = logging.getLogger(__name__)

DialectLike = Union[DialectPolicy, type]


class Reader:
    """
    Reads MT940 documents.

    The reader owns an ordered registry of bank dialects and a set of
    construction hooks. ``parse`` asks each dialect in registration order
    whether it accepts the document and parses the whole document with the
    first one that does. When two dialects accept the same document, the one
    registered first wins.

    A reader is configuration: do not change its dialects or hooks while a
    ``parse`` call is running. Use separate readers for separate
    configurations.

    Example:
        reader = Reader.with_defaults()
        reader.set_transaction_factory(MyTransaction)
        statements = reader.parse(text)
    """

    def __init__(self, dialects: Optional[Mapping[str, DialectLike]] = None):
        self._dialects: "OrderedDict[str, DialectPolicy]" = OrderedDict()
        self._factory = ObjectFactory()
        if dialects:
            self.add_dialects(dialects)

    @classmethod
    def with_defaults(cls) -> "Reader":
        """
        A reader whose registry holds every built-in bank dialect.
        """
        return cls(default_dialects())

    # Dialect management

    @staticmethod
    def default_dialects() -> "OrderedDict[str, DialectPolicy]":
        return default_dialects()

    @property
    def dialects(self) -> "OrderedDict[str, DialectPolicy]":
        """
        A copy of the registry, in evaluation order.
        """
        return OrderedDict(self._dialects)

    def add_dialect(self, name: str, dialect: DialectLike, before: Optional[str] = None) -> "Reader":
        """
        Registers a dialect at the end of the registry, or just before the
        dialect named ``before``. Registering an existing name replaces that
        entry in place (or moves it when ``before`` is given).

        Raises:
            ConfigurationError: If ``dialect`` is not a DialectPolicy, or
                ``before`` names a dialect that is not registered.
        """
        policy = self._coerce(name, dialect)

        # Inserting a dialect before itself keeps its position.
        if before is None or (before == name and name in self._dialects):
            self._dialects[name] = policy
            return self

        if before not in self._dialects:
            raise ConfigurationError(f'Dialect "{before}" does not exist.')

        entries = [(key, value) for key, value in self._dialects.items() if key != name]
        position = [key for key, _ in entries].index(before)
        entries.insert(position, (name, policy))
        self._dialects = OrderedDict(entries)
        return self

    def add_dialects(self, dialects: Mapping[str, DialectLike]) -> "Reader":
        for name, dialect in dialects.items():
            self.add_dialect(name, dialect)
        return self

    def remove_dialect(self, name: str) -> "Reader":
        """
        Raises:
            ConfigurationError: If no dialect is registered under ``name``.
        """
        if name not in self._dialects:
            raise ConfigurationError(f'Dialect "{name}" does not exist.')
        del self._dialects[name]
        return self

    def set_dialects(self, dialects: Optional[Mapping[str, DialectLike]] = None) -> "Reader":
        """
        Replaces the whole registry, e.g. to reorder it.
        """
        self._dialects = OrderedDict()
        if dialects:
            self.add_dialects(dialects)
        return self

    @staticmethod
    def _coerce(name: str, dialect: DialectLike) -> DialectPolicy:
        if isinstance(dialect, type) and issubclass(dialect, DialectPolicy):
            return dialect()
        if isinstance(dialect, DialectPolicy):
            return dialect
        raise ConfigurationError(
            f'Dialect "{name}" must be a DialectPolicy instance or subclass, '
            f"got {type(dialect).__name__}"
        )

    # Construction hooks

    def get_factory(self, role: str) -> Hook:
        return self._factory.get_hook(role)

    def set_factory(self, role: str, hook: Hook) -> "Reader":
        self._factory.set_hook(role, hook)
        return self

    def set_account_factory(self, hook: Hook) -> "Reader":
        """
        Class or callable building the statement account. Called with the
        account number. Returning SKIP drops every statement of that account.
        """
        return self.set_factory("account", hook)

    def set_contra_account_factory(self, hook: Hook) -> "Reader":
        """
        Class or callable building transaction counter-parties. Called with
        the counter-party account number, which may be None when only a name
        was found.
        """
        return self.set_factory("contra_account", hook)

    def set_statement_factory(self, hook: Hook) -> "Reader":
        """
        Class or callable building statements. Called with the account object
        and the statement number. Returning SKIP drops the statement.
        """
        return self.set_factory("statement", hook)

    def set_transaction_factory(self, hook: Hook) -> "Reader":
        """
        Class or callable building transactions. Called without arguments.
        Returning SKIP drops the transaction.
        """
        return self.set_factory("transaction", hook)

    def set_opening_balance_factory(self, hook: Hook) -> "Reader":
        return self.set_factory("opening_balance", hook)

    def set_closing_balance_factory(self, hook: Hook) -> "Reader":
        return self.set_factory("closing_balance", hook)

    # Parsing

    def dialect_for(self, text: str) -> Tuple[str, DialectPolicy]:
        """
        Returns the name and dialect that would parse ``text``.

        An empty registry falls back to the built-in dialects without
        registering them.

        Raises:
            NoSuitableDialectError: If no dialect accepts the text.
        """
        dialects: Dict[str, DialectPolicy] = self._dialects or default_dialects()
        for name, dialect in dialects.items():
            if dialect.accept(text):
                logger.debug("Dialect %s accepted the document", name)
                return name, dialect
        raise NoSuitableDialectError(list(dialects))

    def parse(self, text: str) -> List[StatementInterface]:
        """
        Parses every statement in ``text``, in document order.

        Raises:
            NoSuitableDialectError: If no registered dialect accepts the text.
            StructuralError: If the document layout is broken.
            FieldDecodeError: If a balance or transaction field is malformed.
            HookError: If a construction hook returns an unusable object.
        """
        name, dialect = self.dialect_for(text)
        return StatementAssembler(dialect, self._factory, dialect_name=name).assemble(text)

    get_statements = parse
