from sqlalchemy import Column, Integer, String, DateTime, JSON, ForeignKey
from datetime import datetime
from database import Base   # shared Base from database.py

class Resume(Base):
    __tablename__ = "resumes"
    id = Column(Integer, primary_key=True, index=True)
    file_name = Column(String, nullable=False)
    file_url = Column(String, nullable=False)
    uploaded_by = Column(String, nullable=True)
    raw_text = Column(String, nullable=True)          # provenance only, not the extracted text
    candidate_name = Column(String, nullable=True)
    candidate_email = Column(String, nullable=True)
    phone_number = Column(String, nullable=True)
    parsed_skills = Column(JSON, nullable=False, default=list)
    experience_years = Column(Integer, nullable=True)
    education_level = Column(String, nullable=True)
    predicted_category = Column(Integer, ForeignKey("job_categories.id"), nullable=True)
    confidence_score = Column(Integer, nullable=False)
    status = Column(String, nullable=False, default="processed")
    uploaded_at = Column(DateTime, default=datetime.utcnow)
