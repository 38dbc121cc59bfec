"""
Shared fixtures: an in-memory database per test and a small family.

Family "Smith": parent (guardian), child, sibling.
Family "Jones": other_parent, used for cross-family checks.
"""
import pytest
from datetime import datetime
from sqlalchemy.orm import sessionmaker

from familyhub import models  # noqa: F401  registers all tables
from familyhub.core.database import Base, create_db_engine
from familyhub.modules.achievements.models import Achievement
from familyhub.modules.chores.models import Chore
from familyhub.modules.chores.schemas import AssignmentCreate
from familyhub.modules.chores.service import AssignmentService
from familyhub.modules.families.models import Family, User
from familyhub.shared.constants import ROLE_ADMIN, ROLE_CHILD, ROLE_PARENT


@pytest.fixture
def db_engine():
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def family(db_session):
    family = Family(name="Smith")
    db_session.add(family)
    db_session.commit()
    return family


@pytest.fixture
def other_family(db_session):
    family = Family(name="Jones")
    db_session.add(family)
    db_session.commit()
    return family


def _make_user(db_session, family, email, name, role, points=0):
    user = User(
        family_id=family.id if family else None,
        email=email,
        name=name,
        role=role,
        gamification_points=points,
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def parent(db_session, family):
    return _make_user(db_session, family, "mom@smith.test", "Mom", ROLE_PARENT)


@pytest.fixture
def child(db_session, family):
    return _make_user(db_session, family, "kid@smith.test", "Kid", ROLE_CHILD)


@pytest.fixture
def sibling(db_session, family):
    return _make_user(db_session, family, "sis@smith.test", "Sis", ROLE_CHILD)


@pytest.fixture
def other_parent(db_session, other_family):
    return _make_user(db_session, other_family, "dad@jones.test", "Dad", ROLE_PARENT)


@pytest.fixture
def admin(db_session, family):
    return _make_user(db_session, family, "admin@smith.test", "Admin", ROLE_ADMIN)


@pytest.fixture
def make_chore(db_session, family, parent):
    """Factory for chores in the Smith family"""
    def _make(title="Dishes", points=10, allowance_cents=0):
        chore = Chore(
            family_id=family.id,
            title=title,
            points=points,
            allowance_cents=allowance_cents,
            created_by=parent.id,
        )
        db_session.add(chore)
        db_session.commit()
        return chore
    return _make


@pytest.fixture
def chore(make_chore):
    return make_chore()


@pytest.fixture
def chore_with_allowance(make_chore):
    return make_chore(title="Mow the lawn", points=10, allowance_cents=500)


@pytest.fixture
def assign(db_session, parent, child):
    """Factory: assign a chore to the child (pending)"""
    def _assign(chore, assignee=None):
        return AssignmentService(db_session).create_assignment(
            parent, chore.id, AssignmentCreate(assigned_to=(assignee or child).id)
        )
    return _assign


@pytest.fixture
def completed_assignment(db_session, assign, child):
    """Factory: assign a chore to the child and complete it"""
    def _complete(chore, now=None):
        assignment = assign(chore)
        return AssignmentService(db_session).complete_assignment(
            child, assignment.id, now=now or datetime(2026, 3, 1, 9, 0)
        )
    return _complete


@pytest.fixture
def add_achievement(db_session):
    """Factory for catalog entries"""
    def _add(name, condition, points=0, is_active=True):
        achievement = Achievement(
            name=name,
            description=name,
            icon="star",
            points=points,
            unlock_condition=condition,
            is_active=is_active,
        )
        db_session.add(achievement)
        db_session.commit()
        return achievement
    return _add
