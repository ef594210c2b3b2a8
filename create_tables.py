# create_tables.py
from datetime import date, timedelta
import argparse

from app.config.settings import Settings
from app.database import Base, Database
from app.models import Agent, TeamMember, Task, TaskStatus, TaskPriority, User, Role
from app.utils.security import hash_password

SAMPLE_AGENTS = [
    {
        "name": "John Smith",
        "role": "Senior Agent",
        "office": "New York",
        "region": "Northeast",
        "skills": ["Negotiation", "Client Relations"],
        "active_status": True,
    },
    {
        "name": "Sarah Johnson",
        "role": "Junior Agent",
        "office": "Los Angeles",
        "region": "West",
        "skills": ["Marketing", "Social Media"],
        "active_status": True,
    },
]

# (name, role, index into SAMPLE_AGENTS)
SAMPLE_TEAM_MEMBERS = [
    ("Mike Wilson", "Assistant", 0),
    ("Emily Brown", "Coordinator", 0),
    ("David Lee", "Assistant", 1),
]

# (title, description, status, priority, index into SAMPLE_TEAM_MEMBERS, days until due)
SAMPLE_TASKS = [
    ("Client Meeting Preparation", "Prepare documents for upcoming client meeting",
     TaskStatus.PENDING, TaskPriority.HIGH, 0, 7),
    ("Follow-up Calls", "Make follow-up calls to recent leads",
     TaskStatus.IN_PROGRESS, TaskPriority.MEDIUM, 1, 3),
]

DEFAULT_USERS = [
    ("HR Admin", "hr@agentconnect.com", Role.HR),
    ("Agent User", "agent@agentconnect.com", Role.AGENT),
    ("Member User", "member@agentconnect.com", Role.MEMBER),
]
DEFAULT_PASSWORD = "password123"


def create_tables(database: Database, drop_existing: bool = False):
    """Create all tables"""
    if drop_existing:
        # drop_all orders drops by foreign key dependencies
        database.drop_tables()
        print("🗑️  Existing tables dropped")
    database.create_tables()
    print(f"✅ Tables created: {', '.join(sorted(Base.metadata.tables))}")


def create_default_users(database: Database):
    """Create one login per role"""
    with database.session() as db:
        for username, email, role in DEFAULT_USERS:
            if db.query(User).filter(User.email == email).first():
                print(f"ℹ️  User {email} already exists")
                continue
            db.add(User(
                username=username,
                email=email,
                password_hash=hash_password(DEFAULT_PASSWORD),
                role=role.value,
            ))
            print(f"✅ User created: {email} ({role.value})")
        db.commit()
    print(f"   Password for default users: {DEFAULT_PASSWORD}")


def seed_sample_data(database: Database):
    """Insert sample agents, team members and tasks into an empty store"""
    with database.session() as db:
        if db.query(Agent).count():
            print("ℹ️  Agents already present, skipping sample data")
            return

        agents = [Agent(**fields) for fields in SAMPLE_AGENTS]
        db.add_all(agents)
        db.flush()

        members = [
            TeamMember(name=name, role=role, agent_id=agents[agent_index].id)
            for name, role, agent_index in SAMPLE_TEAM_MEMBERS
        ]
        db.add_all(members)
        db.flush()

        today = date.today()
        db.add_all([
            Task(
                title=title,
                description=description,
                status=task_status,
                priority=priority,
                assigned_to=members[member_index].id,
                due_date=today + timedelta(days=days),
            )
            for title, description, task_status, priority, member_index, days in SAMPLE_TASKS
        ])
        db.commit()

    print(f"✅ Sample data added: {len(SAMPLE_AGENTS)} agents, "
          f"{len(SAMPLE_TEAM_MEMBERS)} team members, {len(SAMPLE_TASKS)} tasks")


def main():
    parser = argparse.ArgumentParser(description="Create the AgentConnect schema and seed data")
    parser.add_argument("--drop", action="store_true", help="drop existing tables first")
    parser.add_argument("--no-sample-data", action="store_true", help="only create tables and users")
    args = parser.parse_args()

    settings = Settings()
    database = Database(settings.database_url, sslmode=settings.db_sslmode)
    try:
        create_tables(database, drop_existing=args.drop)
        create_default_users(database)
        if not args.no_sample_data:
            seed_sample_data(database)
        print("🎉 Database initialization completed successfully!")
    except Exception as e:
        print(f"❌ Error initializing database: {e}")
        raise
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
