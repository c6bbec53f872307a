#!/usr/bin/env python3
"""
Database models and helpers for the Metaverse University gamification data.
Handles student profiles, achievements, challenges, classes and the
per-student join tables, plus the leaderboard query.
"""

import os
import uuid
from datetime import datetime
import logging

from sqlalchemy import (
    create_engine, Column, Integer, String, Boolean, Date, DateTime, Text,
    ForeignKey, JSON, UniqueConstraint,
)
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, relationship

logger = logging.getLogger('metaverse.database')

DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///metaverse_uni.db')

Base = declarative_base()
engine = None
SessionLocal = None


def configure(database_url: str = None):
    """(Re)create the engine and session factory for *database_url*."""
    global engine, SessionLocal, DATABASE_URL
    DATABASE_URL = database_url or DATABASE_URL
    connect_args = {"check_same_thread": False} if DATABASE_URL.startswith('sqlite') else {}
    engine = create_engine(DATABASE_URL, echo=False, connect_args=connect_args)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return engine


def _uuid() -> str:
    return str(uuid.uuid4())


def _iso(value):
    return value.isoformat() if value else None


class Profile(Base):
    """Gamification profile for one student account."""
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), unique=True, index=True, nullable=False)
    username = Column(String(255), nullable=True)
    display_name = Column(String(255), nullable=True)
    avatar_url = Column(String(1024), nullable=True)
    points = Column(Integer, default=0, nullable=False)
    level = Column(Integer, default=1, nullable=False)
    current_streak = Column(Integer, default=0, nullable=False)
    longest_streak = Column(Integer, default=0, nullable=False)
    last_activity_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'username': self.username,
            'display_name': self.display_name,
            'avatar_url': self.avatar_url,
            'points': self.points,
            'level': self.level,
            'current_streak': self.current_streak,
            'longest_streak': self.longest_streak,
            'last_activity_date': _iso(self.last_activity_date),
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at),
        }


class Achievement(Base):
    """An unlockable badge; ``points_required`` orders the catalogue."""
    __tablename__ = "achievements"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    icon = Column(String(255), nullable=False)
    points_required = Column(Integer, default=0, nullable=False)
    type = Column(String(50), nullable=False)  # e.g. 'points', 'streak', 'course'
    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'icon': self.icon,
            'points_required': self.points_required,
            'type': self.type,
            'created_at': _iso(self.created_at),
        }


class Challenge(Base):
    """A time-boxed challenge students can join."""
    __tablename__ = "challenges"

    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    difficulty = Column(String(50), nullable=False)  # 'easy', 'medium', 'hard'
    duration_days = Column(Integer, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    max_participants = Column(Integer, nullable=True)
    points_reward = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'difficulty': self.difficulty,
            'duration_days': self.duration_days,
            'start_date': _iso(self.start_date),
            'end_date': _iso(self.end_date),
            'is_active': self.is_active,
            'max_participants': self.max_participants,
            'points_reward': self.points_reward,
            'created_at': _iso(self.created_at),
        }


class CampusClass(Base):
    """A scheduled class students can enroll in."""
    __tablename__ = "classes"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    instructor = Column(String(255), nullable=True)
    schedule_days = Column(JSON, nullable=True)  # e.g. ["Mon", "Wed"]
    schedule_time = Column(String(50), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'subject': self.subject,
            'description': self.description,
            'instructor': self.instructor,
            'schedule_days': self.schedule_days,
            'schedule_time': self.schedule_time,
            'is_active': self.is_active,
            'created_at': _iso(self.created_at),
        }


class UserAchievement(Base):
    """Achievement earned by a student."""
    __tablename__ = "user_achievements"
    __table_args__ = (UniqueConstraint('user_id', 'achievement_id'),)

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), index=True, nullable=False)
    achievement_id = Column(String(36), ForeignKey("achievements.id"), nullable=False)
    earned_at = Column(DateTime, default=datetime.utcnow)

    achievement = relationship("Achievement")


class UserChallenge(Base):
    """Challenge membership and progress for a student."""
    __tablename__ = "user_challenges"
    __table_args__ = (UniqueConstraint('user_id', 'challenge_id'),)

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), index=True, nullable=False)
    challenge_id = Column(String(36), ForeignKey("challenges.id"), nullable=False)
    progress = Column(Integer, default=0, nullable=False)
    joined_at = Column(DateTime, default=datetime.utcnow)
    completed_at = Column(DateTime, nullable=True)


class UserClass(Base):
    """Class enrollment for a student."""
    __tablename__ = "user_classes"
    __table_args__ = (UniqueConstraint('user_id', 'class_id'),)

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), index=True, nullable=False)
    class_id = Column(String(36), ForeignKey("classes.id"), nullable=False)
    enrolled_at = Column(DateTime, default=datetime.utcnow)


def get_db():
    """Get database session."""
    if SessionLocal is None:
        configure()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables."""
    if engine is None:
        configure()
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized successfully")
        return True
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize database: {e}")
        return False


def get_profile(db, user_id: str):
    """Get the profile dict for *user_id*, or None."""
    if not db:
        return None
    try:
        profile = db.query(Profile).filter(Profile.user_id == user_id).first()
        return profile.to_dict() if profile else None
    except SQLAlchemyError as e:
        logger.error(f"Error fetching profile: {e}")
        return None


def get_achievements(db):
    """All achievements, cheapest first."""
    if not db:
        return []
    try:
        rows = db.query(Achievement).order_by(Achievement.points_required).all()
        return [a.to_dict() for a in rows]
    except SQLAlchemyError as e:
        logger.error(f"Error fetching achievements: {e}")
        return []


def get_user_achievements(db, user_id: str):
    """Achievements earned by *user_id*, each with the achievement embedded."""
    if not db:
        return []
    try:
        rows = db.query(UserAchievement).filter(UserAchievement.user_id == user_id).all()
        return [{
            'id': ua.id,
            'user_id': ua.user_id,
            'achievement_id': ua.achievement_id,
            'earned_at': _iso(ua.earned_at),
            'achievements': ua.achievement.to_dict() if ua.achievement else None,
        } for ua in rows]
    except SQLAlchemyError as e:
        logger.error(f"Error fetching user achievements: {e}")
        return []


def get_active_challenges(db, limit: int = None):
    """Active challenges, soonest-ending first."""
    if not db:
        return []
    try:
        query = (db.query(Challenge)
                 .filter(Challenge.is_active.is_(True))
                 .order_by(Challenge.end_date))
        if limit:
            query = query.limit(limit)
        return [c.to_dict() for c in query.all()]
    except SQLAlchemyError as e:
        logger.error(f"Error fetching challenges: {e}")
        return []


def get_active_classes(db):
    """Active classes ordered by name."""
    if not db:
        return []
    try:
        rows = (db.query(CampusClass)
                .filter(CampusClass.is_active.is_(True))
                .order_by(CampusClass.name)
                .all())
        return [c.to_dict() for c in rows]
    except SQLAlchemyError as e:
        logger.error(f"Error fetching classes: {e}")
        return []


def get_leaderboard(db, limit: int = 10):
    """Top profiles by points, with a 1-based ``rank``."""
    if not db:
        return []
    try:
        rows = (db.query(Profile)
                .order_by(Profile.points.desc())
                .limit(limit)
                .all())
        board = []
        for rank, profile in enumerate(rows, start=1):
            entry = profile.to_dict()
            entry['rank'] = rank
            board.append(entry)
        return board
    except SQLAlchemyError as e:
        logger.error(f"Error fetching leaderboard: {e}")
        return []


def _insert_membership(db, row, label: str):
    """Insert a join-table row; returns ``(ok, message)``.

    No duplicate check is made up front: the unique constraint decides, and
    its message is returned unchanged.
    """
    if not db:
        return False, 'Database not available'
    try:
        db.add(row)
        db.commit()
        return True, f'{label} successful'
    except IntegrityError as e:
        db.rollback()
        message = str(e.orig) if e.orig is not None else str(e)
        logger.warning(f"{label} rejected: {message}")
        return False, message
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{label} failed: {e}")
        return False, str(e)


def join_challenge(db, user_id: str, challenge_id: str):
    """Record that *user_id* joined *challenge_id*."""
    return _insert_membership(
        db, UserChallenge(user_id=user_id, challenge_id=challenge_id, progress=0),
        'Challenge join')


def enroll_in_class(db, user_id: str, class_id: str):
    """Record that *user_id* enrolled in *class_id*."""
    return _insert_membership(
        db, UserClass(user_id=user_id, class_id=class_id),
        'Class enrollment')
