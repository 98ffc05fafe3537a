"""Scopes for the Monkey language. An Environment maps names to Objects and may enclose an outer Environment; lookups
that miss locally continue along the chain of outer environments until the global one (which has no outer).

A new Environment is created for every program run and for every function call. The call's environment encloses the
environment the function was *defined* in, which is what makes closures work. Environments are shared by reference
and live as long as something (a running call or a Function object) still refers to them.
"""


class Environment:

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    @classmethod
    def new_enclosed(cls, outer):
        """Returns a fresh Environment whose lookups fall back to outer."""
        return cls(outer)

    def get(self, name):
        """Returns the Object bound to name in this environment or the closest enclosing one, or None."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name, value):
        """Binds name in this environment (never in an outer one). Returns value."""
        self.store[name] = value
        return value

    def __contains__(self, name):
        return self.get(name) is not None

    def __repr__(self):
        depth = 0
        env = self.outer
        while env is not None:
            depth += 1
            env = env.outer
        return f"Environment(names={sorted(self.store)}, depth={depth})"
