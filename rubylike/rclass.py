"""Ruby-style classes with dynamic methods, hooks, aliases and inheritance."""

import threading
from dataclasses import dataclass

_CO_VARARGS = 0x04

_pool = []
_pool_lock = threading.Lock()


class UndefinedMethodError(AttributeError):
    """Raised when a method cannot be found on a class or its ancestors."""


@dataclass
class Method:
    """A named method bound to a uniform ``function(target, args)`` callable."""

    name: str
    function: object
    is_class: bool = False

    def call_direct(self, target, *args):
        """Invoke the method on ``target`` without hooks or lookup."""
        return self.function(target, list(args))


def _signature_info(fn):
    """Return (takes_self, required, maximum) or None when not inspectable."""
    target = getattr(fn, "__func__", fn)
    bound = target is not fn
    code = getattr(target, "__code__", None)
    if code is None:
        return None
    names = list(code.co_varnames[:code.co_argcount])
    defaults = getattr(target, "__defaults__", None) or ()
    required = len(names) - len(defaults)
    if bound and names:
        names = names[1:]
        required -= 1
    takes_self = bool(names) and names[0] == "self"
    if takes_self:
        names = names[1:]
        required -= 1
    required = max(required, 0)
    variadic = bool(code.co_flags & _CO_VARARGS)
    maximum = None if variadic else len(names)
    return takes_self, required, maximum


def _expected_text(required, maximum):
    if maximum is None:
        return f"{required}+"
    if maximum == required:
        return str(required)
    return f"{required}..{maximum}"


def _wrap(fn):
    """Turn a plain callable into a ``function(target, args)`` callable.

    A callable whose first parameter is named ``self`` receives the target
    object; the remaining parameters receive the call's arguments.
    """
    if fn is None:
        raise TypeError("method function cannot be None")
    if not callable(fn):
        raise TypeError("method must be a function")
    info = _signature_info(fn)
    if info is None:
        return lambda target, args: fn(*args)
    takes_self, required, maximum = info

    def invoke(target, args):
        given = len(args)
        if given < required or (maximum is not None and given > maximum):
            raise TypeError(
                f"wrong number of arguments (given {given}, "
                f"expected {_expected_text(required, maximum)})"
            )
        if takes_self:
            return fn(target, *args)
        return fn(*args)

    return invoke


class RClass:
    """A dynamically built class; instances are RClass objects too."""

    def __init__(self, name):
        self._name = name
        self._parent = None
        self._instance_vars = {}
        self._class_vars = {}
        self._methods = {}
        self._method_cache = {}
        self._cache_version = 0
        self._parent_version = 0
        self._cache_lock = threading.Lock()
        self._var_lock = threading.Lock()
        self._eigen_lock = threading.Lock()
        self._method_missing = None
        self._before_hooks = {}
        self._after_hooks = {}
        self._aliases = {}
        self._eigen_class = None
        self._pooled = False

    def __repr__(self):
        return f"RClass({self._name!r})"

    @property
    def name(self):
        """The class name."""
        return self._name

    @property
    def parent(self):
        """The parent class, or None."""
        return self._parent

    # Method definition

    def _store_method(self, name, fn, is_class):
        method = Method(name, _wrap(fn), is_class)
        self._methods[name] = method
        self._invalidate_cache()
        return self

    def define_method(self, name, fn):
        """Define an instance method and return this class."""
        return self._store_method(name, fn, False)

    def define_class_method(self, name, fn):
        """Define a class method and return this class."""
        return self._store_method(name, fn, True)

    # Instances

    def new(self):
        """Create an instance of this class."""
        instance = None
        if self._pooled:
            with _pool_lock:
                if _pool:
                    instance = _pool.pop()
            if instance is not None:
                instance._clear_for_reuse()
        if instance is None:
            instance = RClass(self._name)
        instance._name = self._name
        instance._class_vars = self._class_vars
        instance._parent = self
        instance._method_missing = self._method_missing
        return instance

    def _clear_for_reuse(self):
        self._instance_vars.clear()
        self._methods.clear()
        with self._cache_lock:
            self._method_cache.clear()
        self._before_hooks.clear()
        self._after_hooks.clear()
        self._aliases.clear()
        self._cache_version = 0
        self._parent_version = 0
        self._eigen_class = None

    # Calling

    def _ancestry(self):
        current = self
        while current is not None:
            yield current
            current = current._parent

    def _resolve_alias(self, method_name):
        for cls in self._ancestry():
            if method_name in cls._aliases:
                return cls._aliases[method_name]
        return method_name

    def _run_before(self, method_name, args):
        for cls in self._ancestry():
            for hook in cls._before_hooks.get(method_name, ()):
                hook(*args)

    def _run_after(self, method_name, result, args):
        for cls in self._ancestry():
            for hook in cls._after_hooks.get(method_name, ()):
                hook(result, *args)

    def _undefined(self, method_name):
        return UndefinedMethodError(
            f"undefined method '{method_name}' for {self._name}"
        )

    def call(self, method_name, *args):
        """Call a method, running alias resolution and before/after hooks."""
        original = method_name
        method_name = self._resolve_alias(method_name)
        self._run_before(original, args)
        method = self._find_method(method_name)
        if method is None:
            if self._method_missing is None:
                raise self._undefined(method_name)
            result = self._method_missing(method_name, *args)
        else:
            result = method.function(self, list(args))
        self._run_after(original, result, args)
        return result

    def fast_call(self, method_name, *args):
        """Call a method without running hooks."""
        method_name = self._resolve_alias(method_name)
        method = self._find_method(method_name)
        if method is None:
            if self._method_missing is None:
                raise self._undefined(method_name)
            return self._method_missing(method_name, *args)
        return method.function(self, list(args))

    def _find_method(self, method_name):
        parent_version = self._parent._cache_version if self._parent else 0
        with self._cache_lock:
            valid = self._parent_version == parent_version
            if valid and method_name in self._method_cache:
                return self._method_cache[method_name]
        method = self._find_method_recursive(method_name)
        with self._cache_lock:
            if not valid:
                self._method_cache = {}
                self._parent_version = parent_version
            self._method_cache[method_name] = method
        return method

    def _find_method_recursive(self, method_name):
        eigen = self._eigen_class
        if eigen is not None and method_name in eigen._methods:
            return eigen._methods[method_name]
        if method_name in self._methods:
            return self._methods[method_name]
        if self._parent is not None:
            return self._parent._find_method_recursive(method_name)
        return None

    def _invalidate_cache(self):
        with self._cache_lock:
            self._method_cache = {}
            self._cache_version += 1

    # Attributes

    def _define_reader(self, name):
        self.define_method(name, lambda self: self.get_instance_var(name))

    def _define_writer(self, name):
        def write(self, value):
            self.set_instance_var(name, value)
            return value

        self.define_method(name + "=", write)

    def attr_accessor(self, *args):
        """Define a reader and a ``name=`` writer for each name."""
        for name in args:
            self._define_reader(name)
            self._define_writer(name)
        return self

    def attr_reader(self, *args):
        """Define a reader for each name."""
        for name in args:
            self._define_reader(name)
        return self

    def attr_writer(self, *args):
        """Define a ``name=`` writer for each name."""
        for name in args:
            self._define_writer(name)
        return self

    # Variables

    def set_instance_var(self, name, value):
        with self._var_lock:
            self._instance_vars[name] = value

    def get_instance_var(self, name):
        """Return the instance variable, or None when unset."""
        with self._var_lock:
            return self._instance_vars.get(name)

    def set_class_var(self, name, value):
        with self._var_lock:
            if self._class_vars is None:
                self._class_vars = {}
            self._class_vars[name] = value

    def get_class_var(self, name):
        """Return the class variable, or None when unset."""
        with self._var_lock:
            if self._class_vars is None:
                return None
            return self._class_vars.get(name)

    # Reflection and metaprogramming

    def method_missing(self, handler):
        """Set ``handler(name, *args)`` for calls to undefined methods."""
        self._method_missing = handler
        return self

    def inherit(self, parent):
        """Make ``parent`` the superclass, sharing its class variables."""
        self._parent = parent
        self._class_vars = parent._class_vars
        self._invalidate_cache()
        return self

    def respond_to(self, method_name):
        return self._find_method(method_name) is not None

    def methods(self):
        """Return the sorted names of all methods along the inheritance chain."""
        names = set()
        for cls in self._ancestry():
            names.update(cls._methods)
        return sorted(names)

    def class_methods(self):
        """Return the sorted names of class methods defined on this class."""
        return sorted(name for name, m in self._methods.items() if m.is_class)

    def instance_vars(self):
        with self._var_lock:
            return list(self._instance_vars)

    def class_vars(self):
        with self._var_lock:
            return list(self._class_vars) if self._class_vars is not None else []

    def is_a(self, class_name):
        """Return True if this class or an ancestor has ``class_name``."""
        return any(cls._name == class_name for cls in self._ancestry())

    def super(self, method_name, *args):
        """Call the superclass version of ``method_name`` on this object."""
        defining = next(
            (cls for cls in self._ancestry() if method_name in cls._methods), None
        )
        if defining is None or defining._parent is None:
            raise UndefinedMethodError(f"no superclass method '{method_name}'")
        method = defining._parent._find_method_recursive(method_name)
        if method is None:
            raise UndefinedMethodError(
                f"undefined method '{method_name}' for {defining._parent._name}"
            )
        return method.function(self, list(args))

    def alias(self, new_name, old_name):
        self._aliases[new_name] = old_name
        return self

    def before(self, method_name, hook):
        """Add ``hook(*args)`` to run before ``method_name`` is called."""
        self._before_hooks.setdefault(method_name, []).append(hook)
        return self

    def after(self, method_name, hook):
        """Add ``hook(result, *args)`` to run after ``method_name`` returns."""
        self._after_hooks.setdefault(method_name, []).append(hook)
        return self

    def eigen_class(self):
        """Return the singleton class of this object, creating it once."""
        with self._eigen_lock:
            if self._eigen_class is None:
                eigen = RClass(self._name + ":EigenClass")
                eigen._parent = self
                self._eigen_class = eigen
            return self._eigen_class

    def define_eigen_method(self, name, fn):
        """Define a method on this object alone."""
        self.eigen_class().define_method(name, fn)
        self._invalidate_cache()
        return self

    # Pooling

    def enable_pooling(self):
        self._pooled = True
        return self

    def return_to_pool(self):
        """Put this object back in the shared pool if pooling is enabled on it."""
        if self._pooled:
            self._clear_for_reuse()
            with _pool_lock:
                _pool.append(self)

    def get_method_directly(self, method_name):
        """Return the Method that a call would use, or None."""
        return self._find_method(method_name)


def new_class(name):
    """Create a new class called ``name``."""
    return RClass(name)