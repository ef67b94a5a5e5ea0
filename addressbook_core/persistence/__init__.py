"""
Address book persistence layer

The address book lives in memory only. This package provides the
store owning the collection of persons together with the pure
helpers it relies upon, the fingerprint function used to derive
entity tags and the evaluation of client preconditions.
"""

from .preconditions import ANY, EntityTag, Precondition, evaluate
from .results import Outcome, Result
from .store import AddressBookStore
