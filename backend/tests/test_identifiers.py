"""
Document Identifier Tests
"""

from noteful.identifiers import ID_LENGTH, is_valid_id, new_id, normalize_id


class TestIdentifiers:

    def test_new_id_shape(self):
        doc_id = new_id()
        assert len(doc_id) == ID_LENGTH
        assert doc_id == doc_id.lower()
        assert is_valid_id(doc_id)

    def test_new_ids_are_unique(self):
        assert len({new_id() for _ in range(500)}) == 500

    def test_validation(self):
        assert is_valid_id("990000000000000000000003")
        assert is_valid_id("ABCDEF0123456789abcdef01")
        assert not is_valid_id("1")
        assert not is_valid_id("zz0000000000000000000000")
        assert not is_valid_id("9900000000000000000000031")
        assert not is_valid_id(None)
        assert not is_valid_id(990000000000000000000003)

    def test_normalize_lowercases(self):
        assert normalize_id("ABCDEF0123456789ABCDEF01") == "abcdef0123456789abcdef01"
