"""로깅 유틸 유닛 테스트"""
import logging

from src.core.logging import SecretMaskingFilter, logger, mask_secrets, sanitize_for_log, setup_logging


class TestSanitizeForLog:
    """로그 문자열 정리 테스트"""

    def test_empty(self):
        assert sanitize_for_log("") == "[empty]"

    def test_newlines_removed(self):
        assert sanitize_for_log("sofa\nINFO fake line") == "sofa INFO fake line"

    def test_truncated(self):
        assert sanitize_for_log("a" * 150) == "a" * 100 + "..."

    def test_secret_masked(self):
        url = "https://www.googleapis.com/customsearch/v1?key=AIzaSECRET&cx=123&q=sofa"
        assert "AIzaSECRET" not in sanitize_for_log(url, max_length=200)
        assert "key=***" in sanitize_for_log(url, max_length=200)


class TestSecretMaskingFilter:
    """handler 필터 테스트"""

    def test_filter_masks_args(self):
        record = logging.LogRecord(
            "replacement_pricer", logging.INFO, __file__, 1, "GET %s", ("/v1?key=abc&q=1",), None
        )

        assert SecretMaskingFilter().filter(record) is True
        assert record.getMessage() == "GET /v1?key=***&q=1"

    def test_plain_text_untouched(self):
        assert mask_secrets("Samsung TV 55 inch") == "Samsung TV 55 inch"

    def test_single_masking_handler(self):
        """setup_logging()을 다시 불러도 마스킹 handler는 하나"""
        setup_logging()
        setup_logging()

        masking = [
            h for h in logger.handlers
            if any(isinstance(f, SecretMaskingFilter) for f in h.filters)
        ]
        assert len(masking) == 1
