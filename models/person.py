from sqlalchemy import Column, Integer, Text, Float, UniqueConstraint
from . import Base

class Person(Base):
    __tablename__ = 'person'
    __table_args__ = (
        UniqueConstraint('first_name', 'last_name', name='uq_person_name'),
    )

    person_id = Column(Integer, primary_key=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    pay = Column(Float)

