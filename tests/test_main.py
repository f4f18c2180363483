"""
==============================================================================
Interactive Menu Tests
==============================================================================

Drives the Application with scripted input and captures its output.

==============================================================================
"""

import pytest
from pathlib import Path
from typing import Iterable, List

from warehouse.main import Application
from warehouse.services import TemperatureReading
from warehouse.storage import ProductFileStore


class _StubTemperature:
    """Temperature source returning a fixed reading."""

    def __init__(self, reading: TemperatureReading):
        self._reading = reading

    def get_reading(self) -> TemperatureReading:
        return self._reading


class _Session:
    """Scripted console: feeds answers and records printed lines."""

    def __init__(self, answers: Iterable[str]):
        self._answers = iter(answers)
        self.prompts: List[str] = []
        self.lines: List[str] = []

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        try:
            return next(self._answers)
        except StopIteration:
            raise EOFError from None

    def output(self, text: str) -> None:
        self.lines.extend(str(text).splitlines() or [""])


LOGIN = ["superadmin", "admin123"]


def _run(answers: Iterable[str], reading=None, products_file: Path = None):
    session = _Session(answers)
    kwargs = {}
    if products_file is not None:
        kwargs["product_store"] = ProductFileStore(products_file)
    app = Application(
        temperature=_StubTemperature(reading or TemperatureReading(value=72.0, ok=True)),
        input_func=session.input,
        output_func=session.output,
        **kwargs,
    )
    return app, session, app.run()


# ============================================================================
# SESSION LIFECYCLE
# ============================================================================

class TestLifecycle:
    """Tests for login, banner and exit."""

    def test_failed_login(self):
        """Wrong credentials end the session with exit code 1."""
        _, session, code = _run(["superadmin", "nope"])

        assert code == 1
        assert "Login failed. Invalid username or password." in session.lines
        assert "Warehouse Management System Menu:" not in session.lines

    def test_exit_choice(self):
        """Choice 9 leaves the loop."""
        _, session, code = _run(LOGIN + ["9"])

        assert code == 0
        assert "Login successful!" in session.lines
        assert session.lines[-1] == "Exiting..."

    def test_end_of_input(self):
        """Running out of input exits cleanly."""
        _, session, code = _run(LOGIN)
        assert code == 0
        assert session.lines[-1] == "Exiting..."

    def test_climate_banner(self):
        """The temperature and advice are shown after login."""
        _, session, _ = _run(LOGIN + ["9"], TemperatureReading(value=30.0, ok=True))

        assert "Warehouse location temperature: 30.00°F" in session.lines
        assert any(line.startswith("Alert: Cold temperatures detected!") for line in session.lines)

    def test_unavailable_temperature(self):
        """A failed lookup says so instead of advising heating."""
        _, session, _ = _run(LOGIN + ["9"], TemperatureReading.unavailable())

        assert "Warehouse temperature is unavailable." in session.lines
        assert not any(line.startswith("Alert:") for line in session.lines)

    @pytest.mark.parametrize("choice", ["0", "10", "abc", ""])
    def test_invalid_choice(self, choice: str):
        """Anything outside 1-9 re-prompts."""
        _, session, code = _run(LOGIN + [choice, "9"])

        assert code == 0
        assert "Invalid choice. Please try again." in session.lines
        assert session.prompts.count("Enter your choice: ") == 2

    def test_products_file_imported(self, tmp_path: Path):
        """The product file is loaded before login."""
        path = tmp_path / "seed.txt"
        path.write_text("1,Hammer,10,Tools\n", encoding="utf-8")

        app, _, _ = _run(LOGIN + ["9"], products_file=path)

        assert app.inventory.find_product(1).data.name == "Hammer"

    def test_ready_log_reports_inventory(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        """Start-up logs the inventory size once the file is imported."""
        path = tmp_path / "seed.txt"
        path.write_text("1,Hammer,10,Tools\n7,Hex Bolt M8,250,Bolts\n", encoding="utf-8")

        with caplog.at_level("INFO", logger="warehouse.main"):
            _run(LOGIN + ["9"], products_file=path)

        assert any("ready: 2 categories, 2 products" in r.getMessage() for r in caplog.records)

    def test_unreadable_products_file(self, tmp_path: Path):
        """A products file that is not UTF-8 does not stop the session."""
        path = tmp_path / "seed.txt"
        path.write_bytes(b"1,Hammer,10,Tools\n2,\xff\xfe,5,Tools\n")

        app, session, code = _run(LOGIN + ["9"], products_file=path)

        assert code == 0
        assert "Login successful!" in session.lines
        assert len(app.inventory.index) == 0


# ============================================================================
# MENU ACTIONS
# ============================================================================

class TestMenuActions:
    """Tests for the numbered menu actions."""

    def test_add_category_and_product(self):
        """Options 1 and 3 build up the inventory."""
        app, session, _ = _run(
            LOGIN
            + ["1", "Tools"]
            + ["3", "Tools", "1", "Hammer", "10"]
            + ["9"]
        )

        assert "Category 'Tools' added successfully." in session.lines
        assert "Product added successfully." in session.lines
        assert "Enter category name where to add product: " in session.prompts
        assert app.inventory.find_product(1).data.quantity == 10

    def test_duplicate_category(self):
        """Adding the same category twice reports it."""
        _, session, _ = _run(LOGIN + ["1", "Tools", "1", "Tools", "9"])
        assert "Category 'Tools' already exists" in session.lines

    def test_add_product_to_missing_category(self):
        """The user is told to create the category first."""
        _, session, _ = _run(LOGIN + ["3", "Tools", "1", "Hammer", "10", "9"])
        assert "Category does not exist. Please create the category first." in session.lines

    def test_add_product_non_numeric(self):
        """Non-numeric id or quantity is refused."""
        _, session, _ = _run(LOGIN + ["1", "Tools", "3", "Tools", "x", "Hammer", "10", "9"])
        assert "Product ID and quantity must be whole numbers." in session.lines

    def test_update_and_decrease(self):
        """Options 4 and 5 change the stock."""
        app, session, _ = _run(
            LOGIN
            + ["1", "Tools", "3", "Tools", "1", "Hammer", "10"]
            + ["4", "1", "20"]
            + ["5", "1", "5"]
            + ["5", "1", "50"]
            + ["9"]
        )

        assert "Product quantity updated to 20." in session.lines
        assert "Decreased quantity by 5. New quantity: 15" in session.lines
        assert "Not enough stock to decrease by 50. Current stock: 15" in session.lines
        assert app.inventory.find_product(1).data.quantity == 15

    def test_delete_category(self):
        """Option 2 removes the category."""
        app, session, _ = _run(LOGIN + ["1", "Tools", "2", "Tools", "9"])

        assert "Category 'Tools' deleted successfully." in session.lines
        assert "Tools" not in app.inventory.index

    def test_display(self):
        """Option 6 lists categories and products."""
        _, session, _ = _run(
            LOGIN + ["1", "Tools", "3", "Tools", "1", "Hammer", "10", "6", "9"]
        )

        start = session.lines.index("All Categories and Products:")
        assert session.lines[start + 1:start + 3] == [
            "Category: Tools",
            "  Product ID: 1, Name: Hammer, Quantity: 10",
        ]

    def test_analyze_category(self):
        """Option 7 prints the analysis report without saving."""
        _, session, _ = _run(
            LOGIN
            + ["1", "Tools", "3", "Tools", "1", "Hammer", "10", "3", "Tools", "2", "Saw", "30"]
            + ["7", "Tools", "n"]
            + ["9"]
        )

        start = session.lines.index("Analysis Report:")
        assert session.lines[start + 1] == "Total quantity: 40"
        assert "Average quantity: 20.00" in session.lines

    def test_analyze_empty(self):
        """Analysing an empty category prints the failure."""
        _, session, _ = _run(LOGIN + ["1", "Tools", "7", "Tools", "9"])
        assert "No products to analyze" in session.lines

    def test_print_products_and_save(self, isolated_settings: Path):
        """Option 8 prints the sorted list and can write it to a file."""
        _, session, _ = _run(
            LOGIN
            + ["1", "Tools", "3", "Tools", "2", "Wrench", "4", "3", "Tools", "1", "Hammer", "10"]
            + ["8", "", "y"]
            + ["9"]
        )

        start = session.lines.index("Inventory List:")
        assert session.lines[start + 2:start + 4] == [
            "1, Hammer, 10, Tools",
            "2, Wrench, 4, Tools",
        ]
        reports = list((isolated_settings / "reports").glob("inventory_products_*.txt"))
        assert len(reports) == 1
