import pytest

from commerce.application.migrate_orders import ORDER_FIELDS
from commerce.domain.exceptions import ValidationError
from commerce.infrastructure.csv_source import read_csv_rows


def _write(tmp_path, text, name="orders.csv"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestReadCsvRows:

    def test_yields_dict_per_row(self, tmp_path):
        path = _write(tmp_path, "userId,totalAmount,productId,quantity\n1,40,10,2\n1,40,11,1\n")
        rows = list(read_csv_rows(path, ORDER_FIELDS))
        assert rows == [
            {"userId": "1", "totalAmount": "40", "productId": "10", "quantity": "2"},
            {"userId": "1", "totalAmount": "40", "productId": "11", "quantity": "1"},
        ]

    def test_bom_and_padded_header_accepted(self, tmp_path):
        path = tmp_path / "orders.csv"
        path.write_bytes("\ufeffuserId, totalAmount,productId,quantity\n2,5,10,1\n".encode("utf-8"))
        assert next(read_csv_rows(path, ORDER_FIELDS))["totalAmount"] == "5"

    def test_short_row_gives_none(self, tmp_path):
        path = _write(tmp_path, "userId,totalAmount,productId,quantity\n1,40\n")
        assert next(read_csv_rows(path, ORDER_FIELDS))["quantity"] is None

    @pytest.mark.parametrize("header", [
        "userId,productId,totalAmount,quantity",
        "userId,totalAmount,productId",
        "",
    ])
    def test_header_mismatch_is_fatal(self, tmp_path, header):
        path = _write(tmp_path, header + "\n")
        with pytest.raises(ValidationError, match="expected header"):
            list(read_csv_rows(path, ORDER_FIELDS))
