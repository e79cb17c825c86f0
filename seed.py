import logging
from datetime import date

from portfolio_api.config import settings
from portfolio_api.database import Base, SessionLocal, engine
from portfolio_api.models.contact_message import ContactMessage  # noqa: F401  (registers table)
from portfolio_api.models.education import Education
from portfolio_api.models.gallery import GalleryItem  # noqa: F401  (registers table)
from portfolio_api.models.profile import Profile
from portfolio_api.models.project import Project
from portfolio_api.models.skill import Skill
from portfolio_api.models.testimonial import Testimonial
from portfolio_api.models.user import User, UserRole
from portfolio_api.services.auth_service import hash_password
from portfolio_api.utils.list_fields import dump_string_list

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = {
    "name": "Your Name",
    "title": "Full Stack Developer & UI/UX Designer",
    "bio": "Passionate full-stack developer with 5+ years of experience creating innovative web applications.",
    "email": "your@email.com",
    "phone": "+1 (234) 567-8900",
    "location": "Your City, Country",
}

SAMPLE_SKILLS = [
    {"name": "React", "level": 95, "category": "Frontend", "icon": "Code", "is_featured": True, "sort_order": 1},
    {"name": "Next.js", "level": 90, "category": "Frontend", "icon": "Globe", "is_featured": True, "sort_order": 2},
    {"name": "TypeScript", "level": 88, "category": "Language", "icon": "Code", "is_featured": True, "sort_order": 3},
    {"name": "Node.js", "level": 85, "category": "Backend", "icon": "Code", "is_featured": True, "sort_order": 4},
    {"name": "MySQL", "level": 80, "category": "Database", "icon": "Database", "is_featured": False, "sort_order": 5},
    {"name": "Tailwind CSS", "level": 92, "category": "Frontend", "icon": "Palette", "is_featured": True, "sort_order": 6},
]

SAMPLE_PROJECTS = [
    {
        "title": "E-Commerce Platform",
        "description": "A full-stack e-commerce solution with payment integration",
        "long_description": (
            "Complete e-commerce platform built with Next.js and Node.js, featuring user authentication, "
            "payment processing with Stripe, inventory management, and admin dashboard."
        ),
        "technologies": ["Next.js", "TypeScript", "Node.js", "MySQL", "Stripe"],
        "github_url": "https://github.com/example/ecommerce",
        "demo_url": "https://demo-ecommerce.com",
        "is_featured": True,
        "status": "completed",
        "sort_order": 1,
    },
    {
        "title": "Task Management App",
        "description": "Collaborative task management with real-time updates",
        "long_description": (
            "Real-time collaborative task management application with drag-and-drop functionality, "
            "team collaboration features, and progress tracking."
        ),
        "technologies": ["React", "Node.js", "Socket.io", "MongoDB"],
        "github_url": "https://github.com/example/taskmanager",
        "demo_url": "https://demo-tasks.com",
        "is_featured": True,
        "status": "completed",
        "sort_order": 2,
    },
]

SAMPLE_TESTIMONIALS = [
    {
        "name": "John Smith",
        "position": "Product Manager",
        "company": "Tech Corp",
        "content": (
            "Amazing developer! Delivered high-quality work on time and exceeded expectations. "
            "Great communication throughout the project."
        ),
        "rating": 5,
        "is_featured": True,
        "sort_order": 1,
    },
    {
        "name": "Sarah Johnson",
        "position": "CEO",
        "company": "StartupXYZ",
        "content": (
            "Professional, skilled, and reliable. Built our entire platform from scratch "
            "and it works flawlessly. Highly recommended!"
        ),
        "rating": 5,
        "is_featured": True,
        "sort_order": 2,
    },
]

SAMPLE_EDUCATION = [
    {
        "institution": "University of Technology",
        "degree": "Bachelor of Science",
        "field_of_study": "Computer Science",
        "start_date": date(2018, 1, 1),
        "end_date": date(2022, 5, 31),
        "is_current": False,
        "description": "Focused on software engineering, data structures, algorithms, and web development.",
        "grade": "3.8 GPA",
        "activities": "Dean's List, Programming Club President",
        "sort_order": 1,
    },
]


def seed_admin(db):
    email = settings.ADMIN_EMAIL.strip().lower()
    if db.query(User).filter(User.email == email).first():
        logger.info("Admin user already exists")
        return
    db.add(User(email=email, password_hash=hash_password(settings.ADMIN_PASSWORD), role=UserRole.admin.value))
    db.commit()
    logger.info("Admin user created: %s", email)


def seed_profile(db):
    if db.query(Profile).first():
        return
    db.add(Profile(**DEFAULT_PROFILE))
    db.commit()
    logger.info("Default profile created")


def seed_sample_content(db):
    for entry in SAMPLE_SKILLS:
        if not db.query(Skill).filter(Skill.name == entry["name"]).first():
            db.add(Skill(**entry))

    for entry in SAMPLE_PROJECTS:
        if not db.query(Project).filter(Project.title == entry["title"]).first():
            db.add(
                Project(
                    **{**entry, "technologies": dump_string_list(entry["technologies"])},
                    gallery_images=dump_string_list([]),
                )
            )

    for entry in SAMPLE_TESTIMONIALS:
        exists = (
            db.query(Testimonial)
            .filter(Testimonial.name == entry["name"], Testimonial.company == entry["company"])
            .first()
        )
        if not exists:
            db.add(Testimonial(**entry))

    for entry in SAMPLE_EDUCATION:
        exists = (
            db.query(Education)
            .filter(Education.institution == entry["institution"], Education.degree == entry["degree"])
            .first()
        )
        if not exists:
            db.add(Education(**entry))

    db.commit()
    logger.info("Sample data inserted successfully")


def run_seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_admin(db)
        seed_profile(db)
        if settings.SEED_SAMPLE_DATA:
            seed_sample_content(db)
    except Exception:
        db.rollback()
        logger.exception("Seeding error")
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    run_seed()
