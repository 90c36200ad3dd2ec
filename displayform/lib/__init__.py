from displayform.lib.exceptions import DisplayFormError, MessageCatalogError, MissingModelError
from displayform.lib.messages import MessageCatalog, flatten_messages

__all__ = [
    "DisplayFormError",
    "MessageCatalog",
    "MessageCatalogError",
    "MissingModelError",
    "flatten_messages",
]
