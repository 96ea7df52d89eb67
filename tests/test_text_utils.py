from suggest_expander.text_utils import join_terms, normalize_query, safe_filename_part, unique_ordered


class TestTextUtils:
    def test_normalize_query(self):
        assert normalize_query("  pizza\t\nnapolitana  ") == "pizza napolitana"

    def test_join_terms(self):
        assert join_terms("por qué", " pizza ") == "por qué pizza"
        assert join_terms("pizza", "") == "pizza"

    def test_unique_ordered(self):
        assert unique_ordered(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]

    def test_safe_filename_part(self):
        assert safe_filename_part(" pizza  al horno ") == "pizza_al_horno"
        assert safe_filename_part("café") == "caf"
