"""Lexical scope records for Egg.

An Environment maps names to values and may have a parent. Lookups fall through to the parent chain, but writes never
do: binding a name that exists in an enclosing scope shadows it instead of reassigning it.
"""

from egg.lang.error import EggReferenceError


class Environment:
    """A single scope record in a chain of scopes. The global environment has no parent."""

    def __init__(self, bindings=None, parent=None):
        self._bindings = dict(bindings) if bindings else {}
        self._parent = parent

    @property
    def parent(self):
        return self._parent

    def lookup(self, name):
        """Returns the value bound to name in the innermost scope that has it."""
        env = self
        while env is not None:
            if name in env._bindings:
                return env._bindings[name]
            env = env._parent
        raise EggReferenceError(f"Undefined variable: {name}")

    def bind(self, name, value):
        """Binds name to value in this scope only, replacing any existing local binding."""
        self._bindings[name] = value

    def child_scope(self, bindings=None):
        """Returns a new scope whose parent is this one, pre-populated with bindings."""
        return Environment(bindings, parent=self)

    def names(self):
        """Names bound directly in this scope."""
        return list(self._bindings)

    def __contains__(self, name):
        env = self
        while env is not None:
            if name in env._bindings:
                return True
            env = env._parent
        return False

    def __repr__(self):
        return f"Environment(names={self.names()}, parent={'yes' if self._parent else 'no'})"
