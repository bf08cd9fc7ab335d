"""Tests for preferred-tag bookkeeping."""

from sqlalchemy import func, select

from snapshare.models import Tag, User, UserTag
from snapshare.services.user_service import get_user, set_preferred_tags


def test_preferred_tags_keep_given_order(db_session, test_user) -> None:
    db_session.add(Tag(name="alpha"))
    db_session.commit()

    set_preferred_tags(db_session, test_user, ["zeta", "alpha"])
    db_session.expire_all()

    reloaded = get_user(db_session, test_user.id)
    assert reloaded is not None
    assert reloaded.preferred_tag_names == ["zeta", "alpha"]


def test_replacing_preferred_tags_reorders_and_drops_old_links(db_session, make_user) -> None:
    user = make_user(preferred=["sea", "sun", "city"])

    set_preferred_tags(db_session, user, ["city", "sea"])
    db_session.expire_all()

    assert db_session.get(User, user.id).preferred_tag_names == ["city", "sea"]
    links = db_session.scalar(select(func.count()).select_from(UserTag).where(UserTag.user_id == user.id))
    assert links == 2


def test_clearing_preferred_tags(db_session, make_user) -> None:
    user = make_user(preferred=["sea"])

    set_preferred_tags(db_session, user, [])

    assert user.preferred_tag_names == []
    assert get_user(db_session, 999) is None
