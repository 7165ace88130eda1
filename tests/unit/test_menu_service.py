"""Unit tests for menu providers and seeding."""
import pytest

from food_ordering.core.config import DEFAULT_MENU_FILE
from food_ordering.services.menu.database_menu import DatabaseMenuProvider, seed_menu
from food_ordering.services.menu.yaml_menu import YamlMenuProvider


class TestYamlMenuProvider:
    """Test YAML menu loading."""

    @pytest.mark.asyncio
    async def test_get_menu(self, test_menu_path):
        """Test items are loaded from the file."""
        provider = YamlMenuProvider(str(test_menu_path))

        items = await provider.get_menu()

        assert [item.id for item in items] == ["margherita", "pepperoni"]
        assert items[0].prices.large == 12.0
        assert items[1].toppings == ["pepperoni"]

    @pytest.mark.asyncio
    async def test_get_item(self, test_menu_path):
        """Test lookup by id."""
        provider = YamlMenuProvider(str(test_menu_path))

        assert (await provider.get_item("pepperoni")).name == "Pepperoni"
        assert await provider.get_item("hawaiian") is None

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        """Test a missing file yields an empty menu."""
        provider = YamlMenuProvider(str(tmp_path / "nope.yaml"))

        assert await provider.get_menu() == []

    @pytest.mark.asyncio
    async def test_bundled_menu(self):
        """Test the packaged seed menu loads."""
        items = await YamlMenuProvider(DEFAULT_MENU_FILE).get_menu()

        assert len(items) > 0
        assert all(item.prices.small <= item.prices.large for item in items)


class TestDatabaseMenuProvider:
    """Test the database-backed menu."""

    @pytest.mark.asyncio
    async def test_seed_and_read(self, test_db, test_menu_path):
        """Test seeding copies the YAML menu into the table."""
        inserted = await seed_menu(test_db, YamlMenuProvider(str(test_menu_path)))

        provider = DatabaseMenuProvider(test_db)
        items = await provider.get_menu()

        assert inserted == 2
        assert [item.name for item in items] == ["Margherita", "Pepperoni"]
        assert items[0].prices.small == 8.0
        assert items[0].toppings == ["mozzarella", "basil"]

    @pytest.mark.asyncio
    async def test_seed_skips_populated_table(self, test_db, test_menu_path):
        """Test seeding twice does not duplicate items."""
        source = YamlMenuProvider(str(test_menu_path))

        await seed_menu(test_db, source)
        second = await seed_menu(test_db, source)

        assert second == 0
        assert await DatabaseMenuProvider(test_db).count() == 2

    @pytest.mark.asyncio
    async def test_get_item(self, test_db, test_menu_path):
        """Test lookup by id."""
        await seed_menu(test_db, YamlMenuProvider(str(test_menu_path)))
        provider = DatabaseMenuProvider(test_db)

        item = await provider.get_item("pepperoni")

        assert item.category == "Non-Veg"
        assert item.prices.medium == 11.0
        assert await provider.get_item("hawaiian") is None

    @pytest.mark.asyncio
    async def test_empty_table(self, test_db):
        """Test an unseeded table returns an empty menu."""
        assert await DatabaseMenuProvider(test_db).get_menu() == []
