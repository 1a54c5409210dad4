"""Tests for the market, vendor and product repositories."""

import pytest
from pydantic import ValidationError

from src.marketplace.entities import (
    Product,
    ProductRepository,
    Tag,
    User,
    UserRepository,
    Vendor,
    VendorRepository,
)

IMAGE = "https://res.cloudinary.com/demo/image/upload/v1/products/a.png"


def _product(vendor_id: str, name: str = "Mango", **kwargs) -> Product:
    return Product(
        name=name,
        description=kwargs.pop("description", "Fresh"),
        image=kwargs.pop("image", IMAGE),
        vendor_id=vendor_id,
        **kwargs,
    )


class TestProductEntity:
    def test_tags_default_to_other(self):
        product = _product("v1")
        assert product.tags == [Tag.OTHER]

    def test_rejects_data_uri_image(self):
        with pytest.raises(ValidationError):
            _product("v1", image="data:image/png;base64,AAAA")

    def test_rejects_empty_name(self):
        with pytest.raises(ValidationError):
            _product("v1", name="")

    def test_tag_label(self):
        assert Tag.BEVERAGES.label == "Beverages"


class TestProductRepository:
    def test_create_and_get_embeds_vendor_and_market(self, session, seed):
        repo = ProductRepository(session)
        created = repo.create(_product(seed.vendor.id, tags=[Tag.PRODUCE]))
        session.commit()

        fetched = repo.get(created.id)

        assert fetched is not None
        assert fetched == created
        assert fetched.tags == [Tag.PRODUCE]
        assert fetched.vendor.id == seed.vendor.id
        assert fetched.vendor.market.id == seed.market.id
        assert fetched.vendor.market.name == "Riverside"

    def test_get_missing_returns_none(self, session, seed):
        assert ProductRepository(session).get("does-not-exist") is None

    def test_list_filters_by_market(self, session, seed):
        repo = ProductRepository(session)
        mango = repo.create(_product(seed.vendor.id, "Mango"))
        bread = repo.create(_product(seed.rival_vendor.id, "Sourdough"))
        session.commit()

        riverside = repo.list_all(seed.market.id)
        hilltop = repo.list_all(seed.other_market.id)
        everything = repo.list_all()

        assert [p.id for p in riverside] == [mango.id]
        assert [p.id for p in hilltop] == [bread.id]
        assert {p.id for p in everything} == {mango.id, bread.id}
        assert all(p.vendor.market_id == seed.market.id for p in riverside)

    def test_list_unknown_market_is_empty(self, session, seed):
        repo = ProductRepository(session)
        repo.create(_product(seed.vendor.id))
        session.commit()

        assert repo.list_all("no-such-market") == []

    def test_update_keeps_vendor(self, session, seed):
        repo = ProductRepository(session)
        created = repo.create(_product(seed.vendor.id))
        session.commit()

        edited = created.model_copy(
            update={
                "name": "Ripe Mango",
                "tags": [Tag.PRODUCE],
                "vendor_id": seed.rival_vendor.id,
            }
        )
        updated = repo.update(edited)
        session.commit()

        assert updated.name == "Ripe Mango"
        assert updated.tags == [Tag.PRODUCE]
        assert updated.vendor_id == seed.vendor.id

    def test_update_missing_raises(self, session, seed):
        with pytest.raises(ValueError):
            ProductRepository(session).update(_product(seed.vendor.id))


class TestVendorRepository:
    def test_first_by_user_phone(self, session, seed):
        vendor = VendorRepository(session).first_by_user_phone(seed.owner.phone)
        assert vendor == seed.vendor

    def test_first_by_user_phone_prefers_earliest(self, session, seed):
        VendorRepository(session).create(
            Vendor(name="Second stall", user_id=seed.owner.id, market_id=seed.market.id)
        )
        session.commit()

        vendor = VendorRepository(session).first_by_user_phone(seed.owner.phone)
        assert vendor.id == seed.vendor.id

    def test_unknown_phone(self, session, seed):
        assert VendorRepository(session).first_by_user_phone("+10000000") is None
        assert VendorRepository(session).first_by_user_phone(seed.shopper.phone) is None


class TestUserRepository:
    def test_get_by_phone(self, session, seed):
        assert UserRepository(session).get_by_phone("+15550002") == seed.rival

    def test_create_round_trip(self, session):
        repo = UserRepository(session)
        user = repo.create(User(first_name="Di", last_name="Fisher", phone="+1777"))
        session.commit()
        assert repo.get(user.id) == user
