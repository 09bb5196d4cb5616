from sqlalchemy import Column, Integer, ForeignKey
from . import Base

class MoviePerson(Base):
    __tablename__ = 'movie_person'

    movie_id = Column(Integer, ForeignKey('movie.movie_id'), primary_key=True)
    person_id = Column(Integer, ForeignKey('person.person_id'), primary_key=True, index=True)

