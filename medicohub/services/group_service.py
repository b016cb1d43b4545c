"""
Group Service
Group creation and membership
"""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from medicohub.extensions import db
from medicohub.errors import ValidationError, NotFoundError, PersistenceError
from medicohub.models import Group
from medicohub.models.group import GroupMember

logger = logging.getLogger(__name__)


class GroupService:
    """Groups of users competing together"""

    @staticmethod
    def create(data):
        name = (data.get('name') or '').strip()
        if not name:
            raise ValidationError('name required')

        members = data.get('members') or []
        if not isinstance(members, list):
            raise ValidationError('members must be a list')

        group = Group(name=name)
        group.memberships = [GroupMember(user_id=m) for m in sorted({str(m) for m in members})]
        try:
            db.session.add(group)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise PersistenceError('Failed to create group') from e

        logger.info('Created group %s (%s) with %d members', group.id, name, len(group.memberships))
        return group

    @staticmethod
    def get(group_id):
        group = db.session.get(Group, group_id)
        if not group:
            raise NotFoundError('Group not found')
        return group

    @staticmethod
    def join(group_id, user_id):
        """Add user to the group; joining twice is a no-op"""
        if user_id in (None, ''):
            raise ValidationError('userId required')
        group = GroupService.get(group_id)
        user_id = str(user_id)

        if not group.has_member(user_id):
            group.memberships.append(GroupMember(user_id=user_id))
            try:
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
            except SQLAlchemyError as e:
                db.session.rollback()
                raise PersistenceError('Failed to join group') from e
            logger.info('User %s joined group %s', user_id, group_id)

        return db.session.get(Group, group_id)
