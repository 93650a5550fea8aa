# Core type aliases for Lispy's data model.
# Runtime data is the closed Value variant in lispy.types.value; the alias
# below lets the built-in table be annotated without repeating the signature.

from typing import Callable

from lispy.types.value import Value

# Built-in operation signature: (env, args) -> Value
BuiltinFn = Callable[..., Value]
