from sqlalchemy import Column, Integer, String, JSON
from database import Base

class JobCategory(Base):
    __tablename__ = "job_categories"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    skills_keywords = Column(JSON, nullable=True)   # ordered list of keyword strings
