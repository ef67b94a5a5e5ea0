"""
Address book schema definitions

Any schema has a base name and any of the following extended names:
 * ``Creation`` to create a new instance of that schema
 * ``Update`` to replace an existing instance of that schema
For example, there are three classes to represent persons:
``Person``, ``PersonCreation`` and ``PersonUpdate``

Creations and updates never carry the ``id`` or the ``href`` of
the person, since both are assigned by the server. Any such field
sent by a client is silently dropped during validation.

This package also contains the ``config`` module, but it's not
exported by default, since it's currently only used internally.
"""

from .bases import *
from .errors import *
