"""Client aggregate with the PersonalInfo value object."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer, String, ValueObject

from pizzeria.domain import pizzeria
from pizzeria.identity.events import ClientRegistered

MAX_EMAIL_LENGTH = 254
MAX_PASSWORD_LENGTH = 255


def client_key(email):
    return email.strip().lower()


@pizzeria.value_object(part_of="Client")
class PersonalInfo:
    """Who the client is: name, postal address and age.

    Replaced wholesale, never edited in place. Statistics group sales by the
    client owning this record.
    """

    last_name = String(required=True, max_length=100)
    first_name = String(required=True, max_length=100)
    address = String(required=True, max_length=255)
    age = Integer(required=True, min_value=1)

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"


@pizzeria.aggregate
class Client:
    """A registered customer of the pizzeria, identified by lower-cased email.

    Passwords are stored and compared as given; there is no hashing.
    """

    key = String(identifier=True, max_length=MAX_EMAIL_LENGTH)
    email = String(required=True, max_length=MAX_EMAIL_LENGTH)
    password = String(required=True, max_length=MAX_PASSWORD_LENGTH)
    personal_info = ValueObject(PersonalInfo, required=True)
    registered_at = DateTime()

    @invariant.post
    def credentials_must_not_be_blank(self):
        if self.email is not None and not self.email.strip():
            raise ValidationError({"email": ["Email cannot be blank"]})
        if self.password is not None and not self.password.strip():
            raise ValidationError({"password": ["Password cannot be blank"]})

    @classmethod
    def register(cls, email, password, personal_info, registered_at=None):
        now = registered_at or datetime.now(UTC)

        client = cls(
            key=client_key(email),
            email=email.strip(),
            password=password,
            personal_info=personal_info,
            registered_at=now,
        )
        client.raise_(
            ClientRegistered(
                client_key=client.key,
                email=client.email,
                last_name=personal_info.last_name,
                first_name=personal_info.first_name,
                registered_at=now,
            )
        )
        return client

    def check_password(self, password):
        return password is not None and password == self.password
