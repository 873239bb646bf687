from collections.abc import Mapping
from typing import Any, Callable, TypeAlias

Instance: TypeAlias = Any
"""
Opaque model object built by a factory.
"""

ModelName: TypeAlias = str | type | tuple[type, str | None]
"""
Identifier of a factory.

Can be a string, a model class, or a tuple of model class, group.

For example, those identifiers are equivalents:

```python
"admin:User"
(User, "admin")
```
"""

AttributeSpec: TypeAlias = Mapping[str, Any]
"""
Attribute specifications of a factory, each value being a Kind or a literal.
"""

Callback: TypeAlias = Callable[[Instance, bool], Any]
"""
Any callable that has 2 parameters: instance and whether it is pending or saved.
"""
