from bakery.reviews.mapping import ColumnMap, coerce_rating, infer_columns, map_row, map_rows
from bakery.reviews.models import Table


# ── Column inference ─────────────────────────────────────────────────────


class TestInferColumns:
    def test_header_based(self):
        columns = infer_columns(["Timestamp", "Stars", "Comment", "Suggestions", "Author"])
        assert columns == ColumnMap(name=4, review=2, rating=1)

    def test_positional_fallback(self):
        columns = infer_columns(["Column 1", "Column 2"])
        assert columns == ColumnMap(name=0, review=1, rating=None)

    def test_case_insensitive_substring(self):
        columns = infer_columns(["Your NAME please", "Customer Feedback", "Overall Rating"])
        assert columns.name == 0
        assert columns.review == 1
        assert columns.rating == 2

    def test_first_match_wins(self):
        columns = infer_columns(["Name", "Review", "Review (again)", "Score", "Rating"])
        assert columns.review == 1
        assert columns.rating == 3

    def test_column_claimed_by_name_is_not_reused(self):
        columns = infer_columns(["Customer review", "Message"])
        assert columns.name == 0
        assert columns.review == 1

    def test_empty_and_missing_labels(self):
        columns = infer_columns(["", None, "Feedback"])
        assert columns == ColumnMap(name=0, review=2, rating=None)


# ── Rating coercion ──────────────────────────────────────────────────────


class TestCoerceRating:
    def test_clamps_high(self):
        assert coerce_rating("7.8") == 5

    def test_clamps_low(self):
        assert coerce_rating("-3") == 0

    def test_non_numeric_is_absent(self):
        assert coerce_rating("abc") is None

    def test_missing_is_absent(self):
        assert coerce_rating(None) is None
        assert coerce_rating("") is None

    def test_native_numbers(self):
        assert coerce_rating(4) == 4
        assert coerce_rating(4.0) == 4

    def test_rounds_half_up(self):
        assert coerce_rating("4.5") == 5
        assert coerce_rating(2.5) == 3
        assert coerce_rating("3.4") == 3

    def test_leading_number(self):
        assert coerce_rating("5 stars") == 5
        assert coerce_rating("4/5") == 4

    def test_non_finite(self):
        assert coerce_rating(float("nan")) is None
        assert coerce_rating(float("inf")) is None

    def test_huge_native_int_is_clamped(self):
        assert coerce_rating(10 ** 400) == 5
        assert coerce_rating(-(10 ** 400)) == 0

    def test_huge_numeric_text_is_absent(self):
        # float() of an over-long digit string is inf, so the rating is absent
        assert coerce_rating("9" * 400) is None


# ── Row mapping ──────────────────────────────────────────────────────────


class TestMapRow:
    def test_header_based_row(self):
        table = Table(
            columns=["Timestamp", "Stars", "Comment", "Suggestions", "Author"],
            rows=[["2024-01-01", "5", "Great cake!", "", "Jane"]],
        )
        reviews = map_rows(table)
        assert len(reviews) == 1
        assert reviews[0].name == "Jane"
        assert reviews[0].review_text == "Great cake!"
        assert reviews[0].rating == 5

    def test_positional_row(self):
        reviews = map_rows(Table(columns=["A", "B"], rows=[["Jane", "Great cake!"]]))
        assert reviews[0].name == "Jane"
        assert reviews[0].review_text == "Great cake!"
        assert reviews[0].rating is None

    def test_short_row_is_dropped(self):
        columns = ColumnMap(name=0, review=1, rating=2)
        assert map_row(["Jane"], columns) is None

    def test_missing_rating_cell(self):
        review = map_row(["Jane", "Yum"], ColumnMap(name=0, review=1, rating=2))
        assert review is not None
        assert review.rating is None

    def test_text_is_sanitized(self):
        review = map_row(["<i>Jane</i>", "Great <b>cake</b>!! // nice"], ColumnMap(0, 1, None))
        assert review.name == "Jane"
        assert review.review_text == "Great cake!!"

    def test_empty_after_sanitizing_is_dropped(self):
        assert map_row(["Jane", "<br/> // "], ColumnMap(0, 1, None)) is None
        assert map_row(["<b></b>", "Yum"], ColumnMap(0, 1, None)) is None

    def test_code_is_dropped(self):
        row = ["Jane", "function attack() { document.cookie }"]
        assert map_row(row, ColumnMap(0, 1, None)) is None

    def test_numeric_cells_become_text(self):
        review = map_row([42.0, 5.0], ColumnMap(0, 1, None))
        assert review.name == "42"
        assert review.review_text == "5"


class TestMapRows:
    def test_cap_keeps_original_order(self):
        rows = [[f"Customer {i}", f"Review number {i}", str(i % 6)] for i in range(30)]
        reviews = map_rows(Table(columns=["Name", "Review", "Rating"], rows=rows))
        assert len(reviews) == 24
        assert [r.name for r in reviews] == [f"Customer {i}" for i in range(24)]

    def test_cap_counts_only_kept_rows(self):
        rows = [["Bad", "var x = 1;"]] * 5 + [[f"C{i}", "Lovely"] for i in range(30)]
        reviews = map_rows(Table(columns=["Name", "Review"], rows=rows))
        assert len(reviews) == 24
        assert reviews[0].name == "C0"

    def test_custom_cap(self):
        rows = [["Jane", "Yum"]] * 5
        assert len(map_rows(Table(columns=[], rows=rows), max_reviews=2)) == 2

    def test_empty_table(self):
        assert map_rows(Table()) == []

    def test_oversized_rating_only_affects_its_row(self):
        table = Table(
            columns=["Name", "Review", "Rating"],
            rows=[["Jane", "Great cake!", 5], ["Bob", "Lovely", 10 ** 400], ["Ann", "Yum", "1e999"]],
        )
        reviews = map_rows(table)
        assert [(r.name, r.rating) for r in reviews] == [("Jane", 5), ("Bob", 5), ("Ann", None)]
