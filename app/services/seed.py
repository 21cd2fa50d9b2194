"""Sample portfolio data for demos and local development."""

from datetime import timedelta

from app.errors import ValidationError
from app.managers.cache_manager import CacheManager
from app.models import PortfolioUserDB, ProjectDB, SkillDB
from app.monitoring.logging import get_logger
from app.repositories import PortfolioUserRepository
from app.schemas.common import MessageResponse
from app.utils.cache_keys import PORTFOLIO_LIST_KEYS
from app.utils.helpers import utc_now

logger = get_logger(__name__)

SAMPLE_USER = {
    "name": "Jordan Developer",
    "bio": (
        "Full-stack developer passionate about creating innovative web solutions and "
        "learning cutting-edge technologies. Specialized in .NET ecosystem with "
        "expertise in modern web development."
    ),
    "profile_image_url": (
        "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d"
        "?w=300&h=300&fit=crop&crop=face"
    ),
}

# (title, description, image, github, demo, technologies, created days ago, updated days ago)
SAMPLE_PROJECTS: tuple[tuple[str, str, str, str, str | None, str, int, int], ...] = (
    (
        "SkillSnap Portfolio Manager",
        "A comprehensive portfolio management system built with Blazor WebAssembly and "
        "ASP.NET Core. Features JWT authentication, performance caching, and responsive design.",
        "https://images.unsplash.com/photo-1460925895917-afdab827c52f?w=400&h=200&fit=crop",
        "https://github.com/demo/skillsnap",
        "https://skillsnap-demo.azurewebsites.net",
        "C#, Blazor WebAssembly, ASP.NET Core, Entity Framework, SQLite",
        30,
        5,
    ),
    (
        "E-Commerce Platform",
        "Modern e-commerce solution with real-time inventory management, secure payment "
        "processing, and advanced analytics dashboard.",
        "https://images.unsplash.com/photo-1556742049-0cfed4f6a45d?w=400&h=200&fit=crop",
        "https://github.com/demo/ecommerce-platform",
        "https://ecommerce-demo.herokuapp.com",
        "React, Node.js, MongoDB, Stripe API, Redis",
        60,
        10,
    ),
    (
        "Weather Analytics Dashboard",
        "Interactive weather analytics platform with real-time data visualization, "
        "forecasting algorithms, and location-based insights.",
        "https://images.unsplash.com/photo-1504608524841-42fe6f032b4b?w=400&h=200&fit=crop",
        "https://github.com/demo/weather-analytics",
        "https://weather-analytics.netlify.app",
        "Vue.js, Python Flask, PostgreSQL, Chart.js, OpenWeather API",
        90,
        15,
    ),
    (
        "Task Management API",
        "RESTful API for team collaboration and task management with role-based "
        "permissions, real-time notifications, and comprehensive reporting.",
        "https://images.unsplash.com/photo-1611224923853-80b023f02d71?w=400&h=200&fit=crop",
        "https://github.com/demo/task-management-api",
        None,
        "ASP.NET Core Web API, SignalR, Entity Framework, JWT, Swagger",
        45,
        8,
    ),
)

SAMPLE_SKILLS: tuple[tuple[str, str], ...] = (
    ("C#", "Expert"),
    ("ASP.NET Core", "Expert"),
    ("Git/GitHub", "Expert"),
    ("RESTful APIs", "Expert"),
    ("Blazor WebAssembly", "Advanced"),
    ("Entity Framework Core", "Advanced"),
    ("JavaScript/TypeScript", "Advanced"),
    ("SQL Server", "Advanced"),
    ("React", "Intermediate"),
    ("Vue.js", "Intermediate"),
    ("Azure Cloud Services", "Intermediate"),
    ("Docker", "Intermediate"),
)


class SeedService:
    """Insert one sample portfolio into an empty database."""

    def __init__(self, portfolio_user_repo: PortfolioUserRepository, cache: CacheManager) -> None:
        self.portfolio_user_repo = portfolio_user_repo
        self.cache = cache

    async def seed(self) -> MessageResponse:
        """
        Insert the sample portfolio user with their projects and skills.

        Raises:
            ValidationError: If any portfolio user already exists.
        """
        if await self.portfolio_user_repo.any_exist():
            raise ValidationError("Sample data already exists.")

        session = self.portfolio_user_repo.session
        now = utc_now()

        user = PortfolioUserDB(**SAMPLE_USER, created_at=now)
        session.add(user)
        await session.flush()

        for title, description, image, github, demo, tech, created, updated in SAMPLE_PROJECTS:
            session.add(
                ProjectDB(
                    title=title,
                    description=description,
                    image_url=image,
                    github_url=github,
                    live_demo_url=demo,
                    technologies=tech,
                    portfolio_user_id=user.id,
                    created_at=now - timedelta(days=created),
                    updated_at=now - timedelta(days=updated),
                ),
            )
        session.add_all(
            SkillDB(name=name, level=level, portfolio_user_id=user.id)
            for name, level in SAMPLE_SKILLS
        )

        await session.commit()
        await self.cache.delete(*PORTFOLIO_LIST_KEYS)
        logger.info(
            "Sample data inserted",
            portfolio_user_id=user.id,
            projects=len(SAMPLE_PROJECTS),
            skills=len(SAMPLE_SKILLS),
        )
        return MessageResponse(message="Sample data inserted.")
