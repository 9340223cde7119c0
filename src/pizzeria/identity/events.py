"""Domain events for the Client aggregate."""

from protean.fields import DateTime, Identifier, String

from pizzeria.domain import pizzeria


@pizzeria.event(part_of="Client")
class ClientRegistered:
    """A new client signed up."""

    __version__ = 1

    client_key = Identifier(required=True)
    email = String(required=True)
    last_name = String(required=True)
    first_name = String(required=True)
    registered_at = DateTime(required=True)
