from textual.widgets import DataTable

from dmgs.steps import StepStatus
from dmgs.ui.app import BuildApp

STEPS = ["Validating configuration...", "Cleaning up..."]


async def test_step_rows_line_up_with_columns():
    app = BuildApp("TestApp (unsigned)", STEPS)

    async with app.run_test():
        table = app.query_one("#steps-table", DataTable)

        assert [str(column.label) for column in table.columns.values()] == ["Status", "#", "Step"]
        assert table.get_cell("0", "number") == "[1/2]"
        assert table.get_cell("0", "step") == "Validating configuration..."
        assert table.get_cell("1", "step") == "Cleaning up..."


async def test_status_cell_updates():
    app = BuildApp("TestApp (unsigned)", STEPS)

    async with app.run_test():
        await app.update_step_status(2, StepStatus.FAILED)
        table = app.query_one("#steps-table", DataTable)

        assert "FAILED" in table.get_cell("1", "status")
        assert "PENDING" in table.get_cell("0", "status")
