from sqlalchemy import Column, Integer, Text, Date, Float
from . import Base

class Movie(Base):
    __tablename__ = 'movie'

    movie_id = Column(Integer, primary_key=True)
    title = Column(Text, nullable=False)
    release_date = Column(Date)
    synopsis = Column(Text)
    rating = Column(Float)
    run_time = Column(Integer)
    category = Column(Text)

