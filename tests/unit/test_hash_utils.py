"""해싱 유틸리티 유닛 테스트"""
from src.utils.hash_utils import compose_validation_key, generate_cache_key, hash_string


class TestHashUtils:
    """해싱 테스트"""

    def test_hash_string(self):
        assert hash_string("hello") == "5d41402abc4b2a76b9719d911017c592"

    def test_hash_lone_surrogate(self):
        """짝 없는 surrogate도 예외 없이 해시"""
        assert len(hash_string("sofa \ud800")) == 32
        assert hash_string("sofa \ud800") != hash_string("sofa ")

    def test_compose_key_keeps_missing_bounds(self):
        """하한 없음(None)과 0은 다른 키"""
        assert compose_validation_key("sofa", None, 100, "between") == "sofa_None_100.0_between"
        assert compose_validation_key("sofa", 0, 100, "between") != compose_validation_key(
            "sofa", None, 100, "between"
        )

    def test_int_and_float_bounds_same_key(self):
        assert generate_cache_key("sofa", 100, 200, "between") == generate_cache_key(
            "sofa", 100.0, 200.0, "between"
        )

    def test_generate_cache_key(self):
        key = generate_cache_key("sofa", 10, 100, "between", prefix="validate")
        assert key.startswith("validate:")
        assert key == f"validate:{hash_string('sofa_10.0_100.0_between')}"

    def test_operator_changes_key(self):
        assert generate_cache_key("sofa", 10, 100, "between") != generate_cache_key("sofa", 10, 100, "less_than")
