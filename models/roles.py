from dataclasses import dataclass
from enum import Enum
from sqlalchemy import Column, Integer, Text, ForeignKey
from . import Base

class Actor(Base):
    __tablename__ = 'actor'

    actor_id = Column(Integer, primary_key=True)
    person_id = Column(Integer, ForeignKey('person.person_id'), nullable=False, index=True)
    role = Column(Text)

class Actress(Base):
    __tablename__ = 'actress'

    actress_id = Column(Integer, primary_key=True)
    person_id = Column(Integer, ForeignKey('person.person_id'), nullable=False, index=True)
    role = Column(Text)

class Writer(Base):
    __tablename__ = 'writer'

    writer_id = Column(Integer, primary_key=True)
    person_id = Column(Integer, ForeignKey('person.person_id'), nullable=False, index=True)
    contribution = Column(Text)

class Director(Base):
    __tablename__ = 'director'

    director_id = Column(Integer, primary_key=True)
    person_id = Column(Integer, ForeignKey('person.person_id'), nullable=False, index=True)
    position = Column(Text)

class Producer(Base):
    __tablename__ = 'producer'

    producer_id = Column(Integer, primary_key=True)
    person_id = Column(Integer, ForeignKey('person.person_id'), nullable=False, index=True)
    position = Column(Text)


@dataclass(frozen=True)
class RoleSpec:
    model: type
    id_field: str
    field: str
    label: str

    @property
    def id_column(self):
        return getattr(self.model, self.id_field)

    @property
    def value_column(self):
        return getattr(self.model, self.field)


class RoleKind(str, Enum):
    ACTOR = "actor"
    ACTRESS = "actress"
    WRITER = "writer"
    DIRECTOR = "director"
    PRODUCER = "producer"

    @property
    def spec(self) -> RoleSpec:
        return ROLE_SPECS[self]

    @classmethod
    def parse(cls, value: str):
        """Resolve a request's person type; None when it names no known kind."""
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError):
            return None


ROLE_SPECS = {
    RoleKind.ACTOR: RoleSpec(Actor, "actor_id", "role", "Actor"),
    RoleKind.ACTRESS: RoleSpec(Actress, "actress_id", "role", "Actress"),
    RoleKind.WRITER: RoleSpec(Writer, "writer_id", "contribution", "Writer"),
    RoleKind.DIRECTOR: RoleSpec(Director, "director_id", "position", "Director"),
    RoleKind.PRODUCER: RoleSpec(Producer, "producer_id", "position", "Producer"),
}
