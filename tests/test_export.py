import pandas as pd
import pytest

from grocery_utils.shopping.aggregation import aggregate
from grocery_utils.shopping.export import (
    COLUMNS,
    shopping_list_to_dataframe,
    write_shopping_list_csv,
)


@pytest.fixture
def shopping_list():
    return aggregate(
        [
            {"title": "Baked Ziti", "ingredients": [{"name": "penne", "amount": "8", "unit": "oz"}]},
            {
                "title": "Pasta Salad",
                "ingredients": [
                    {"name": "penne pasta", "amount": "1", "unit": "lb"},
                    {"name": "salt", "amount": "to taste"},
                ],
            },
        ],
        [{"name": "table salt", "quantity": 1, "unit": "item"}],
    )


def test_shopping_list_to_dataframe(shopping_list):
    """Test one row per item, in shopping list order."""
    df = shopping_list_to_dataframe(shopping_list)

    assert list(df.columns) == COLUMNS
    assert len(df) == 2

    pasta = df.iloc[0]
    assert pasta["category"] == "Pasta"
    assert pasta["name"] == "penne pasta"
    assert pasta["amount"] == "8 oz, 1 lb"
    assert pasta["recipes"] == "Baked Ziti; Pasta Salad"
    assert not pasta["in_inventory"]
    assert pasta["inventory_item"] == ""
    assert pasta["match_reason"] == "none"

    salt = df.iloc[1]
    assert salt["category"] == "Spices & Seasonings"
    assert salt["in_inventory"]
    assert salt["inventory_item"] == "table salt"
    assert salt["is_pantry_staple"]


def test_empty_shopping_list_to_dataframe():
    """Test that an empty list still has every column."""
    df = shopping_list_to_dataframe(aggregate([]))
    assert df.empty
    assert list(df.columns) == COLUMNS


def test_write_shopping_list_csv(shopping_list, tmp_path):
    """Test writing and reading back the CSV."""
    output_file = tmp_path / "shopping_list.csv"
    write_shopping_list_csv(shopping_list, str(output_file))

    df = pd.read_csv(output_file, keep_default_na=False)
    assert list(df.columns) == COLUMNS
    assert df["name"].tolist() == ["penne pasta", "salt"]
    assert df["in_inventory"].tolist() == [False, True]


def test_write_shopping_list_csv_only_needed(shopping_list, tmp_path):
    """Test that covered items can be left out of the CSV."""
    output_file = tmp_path / "needed.csv"
    write_shopping_list_csv(shopping_list, str(output_file), include_covered=False)

    df = pd.read_csv(output_file, keep_default_na=False)
    assert df["name"].tolist() == ["penne pasta"]


def test_write_shopping_list_csv_skips_index(shopping_list, mocker):
    """Test that the CSV is written without the index."""
    mock_to_csv = mocker.patch.object(pd.DataFrame, "to_csv")
    write_shopping_list_csv(shopping_list, "out.csv")
    mock_to_csv.assert_called_once_with("out.csv", index=False)
