"""
Tests for the starter data.
"""
from decimal import Decimal

from foodorder import auth, models, seed


class TestSeed:

    def test_seeds_empty_tables(self, db_session):
        assert seed.seed_users(db_session) == 5
        assert seed.seed_food_items(db_session) == 8

        thor = db_session.query(models.User).filter(models.User.email == "thor@nick.fury").one()
        assert (thor.role, thor.location) == ("Member", "Wakanda")
        assert auth.verify_password(seed.DEFAULT_PASSWORD, thor.password_hash)

        pizza = db_session.query(models.FoodItem).filter(models.FoodItem.name == "Margherita Pizza").one()
        assert pizza.price == Decimal("12.99")
        assert pizza.available is True

    def test_second_run_is_a_no_op(self, db_session):
        seed.seed_users(db_session)
        seed.seed_food_items(db_session)
        assert seed.seed_users(db_session) == 0
        assert seed.seed_food_items(db_session) == 0
        assert db_session.query(models.User).count() == 5
        assert db_session.query(models.FoodItem).count() == 8
