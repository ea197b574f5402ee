import pytest

from pcstore.domain.exceptions import ConflictError, NotFoundError
from pcstore.services.favorite_service import FavoriteService


class TestFavorites:

    def test_duplicate_favorite_rejected(self, db, make_user, make_product):
        user = make_user()
        product = make_product()
        svc = FavoriteService(db)

        svc.add_favorite(user.id, product.id)
        with pytest.raises(ConflictError):
            svc.add_favorite(user.id, product.id)

        assert [f.id for f in svc.list_favorites(user.id)] == [product.id]

    def test_favorites_are_per_user(self, db, make_user, make_product):
        alice = make_user("alice")
        bob = make_user("bob")
        product = make_product()
        svc = FavoriteService(db)

        svc.add_favorite(alice.id, product.id)
        svc.add_favorite(bob.id, product.id)

        assert len(svc.list_favorites(alice.id)) == 1
        assert len(svc.list_favorites(bob.id)) == 1

    def test_remove(self, db, make_user, make_product):
        user = make_user()
        product = make_product()
        svc = FavoriteService(db)
        svc.add_favorite(user.id, product.id)

        svc.remove_favorite(user.id, product.id)

        assert svc.list_favorites(user.id) == []
        with pytest.raises(NotFoundError):
            svc.remove_favorite(user.id, product.id)

    def test_unknown_product(self, db, make_user):
        user = make_user()
        with pytest.raises(NotFoundError):
            FavoriteService(db).add_favorite(user.id, 404)
