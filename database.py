# database.py
from sqlalchemy import create_engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from loguru import logger

from configs.config import DB_URL


def _engine_kwargs(url: str) -> dict:
    # in-memory SQLite needs a single shared connection across threads
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return kwargs
    return {}


engine = create_engine(DB_URL, **_engine_kwargs(DB_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# --- FastAPI dependency ---
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# ---------------- Extra Helper Functions ---------------- #

DEFAULT_CATEGORIES = [
    ("Software Engineer", ["JavaScript", "Python", "React", "Java", "TypeScript", "Node.js", "SQL", "Git"]),
    ("DevOps Engineer", ["AWS", "Docker", "Kubernetes", "Terraform", "CI/CD", "Jenkins", "Linux", "Ansible"]),
    ("UI/UX Designer", ["Figma", "Sketch", "Adobe Creative Suite", "User Research", "Prototyping", "Wireframing"]),
    ("Data Scientist", ["Python", "Machine Learning", "TensorFlow", "SQL", "Statistics", "Pandas", "R"]),
    ("Product Manager", ["Product Management", "Agile", "Scrum", "Analytics", "Strategy", "Roadmapping"]),
]


# Fetch the full category catalog (no pagination)
def get_job_categories(db: Session):
    from models.job_category import JobCategory  # lazy import to avoid circular import
    return db.query(JobCategory).order_by(JobCategory.id).all()


# Seed the default catalog when the table is empty
def seed_job_categories(db: Session) -> int:
    from models.job_category import JobCategory  # lazy import
    if db.query(JobCategory).first() is not None:
        return 0
    for name, keywords in DEFAULT_CATEGORIES:
        db.add(JobCategory(name=name, skills_keywords=keywords))
    db.commit()
    logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} default job categories")
    return len(DEFAULT_CATEGORIES)


# Fetch one processed resume by ID
def get_resume(db: Session, resume_id: int):
    from models.resume import Resume  # lazy import
    return db.query(Resume).filter(Resume.id == resume_id).first()
