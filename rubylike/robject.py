"""Common base for the Ruby-style value objects."""


class RObject:
    """Base object that knows its Ruby-style class name."""

    def __init__(self, class_name):
        self._class_name = class_name

    def class_name(self):
        """Return the Ruby-style class name of this object."""
        return self._class_name

    def is_a(self, class_name):
        """Return True if this object belongs to the named class."""
        return self._class_name == class_name

    def to_string(self):
        """Return a textual form of the object."""
        return f"#<{self._class_name}>"

    def equal(self, other):
        """Return True if ``other`` is the same object."""
        return self is other

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"{type(self).__name__}({self.to_string()!r})"

    def __eq__(self, other):
        if not isinstance(other, RObject):
            return NotImplemented
        return self.equal(other)

    def __hash__(self):
        return hash((self._class_name, self.to_string()))