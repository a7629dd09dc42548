import pytest

from posty5.exceptions import EmptyResultError
from posty5.models import ApiResponse, Pagination, RetryPolicy, UploadTarget


class TestApiResponse:
    def test_from_envelope(self):
        response = ApiResponse.from_payload(
            {"result": {"a": 1}, "message": "ok", "isSuccess": True}, 200
        )

        assert response.result == {"a": 1}
        assert response.message == "ok"
        assert response.is_success is True
        assert response.has_result

    def test_data_key_fallback(self):
        assert ApiResponse.from_payload({"data": [1, 2]}).result == [1, 2]

    def test_misspelled_exception_key(self):
        response = ApiResponse.from_payload({"exeption": ["bad"]})
        assert response.exception == ["bad"]

    def test_non_dict_payload(self):
        assert ApiResponse.from_payload([1, 2]).result == [1, 2]
        assert ApiResponse.from_payload(None).result is None

    def test_unwrap_missing_result(self):
        response = ApiResponse.from_payload({"message": "nothing here"})

        assert not response.has_result
        with pytest.raises(EmptyResultError) as exc_info:
            response.unwrap()
        assert exc_info.value.message == "nothing here"


class TestPagination:
    def test_to_params(self):
        params = Pagination(page=2, page_size=25, sort_field="createdAt", sort_type="desc").to_params()
        assert params == {
            "page": 2,
            "pageSize": 25,
            "sortField": "createdAt",
            "sortType": "desc",
        }

    def test_defaults_omit_sorting(self):
        assert Pagination().to_params() == {"page": 1, "pageSize": 10}

    @pytest.mark.parametrize(
        "kwargs",
        [{"page": 0}, {"page_size": 0}, {"sort_type": "up"}],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            Pagination(**kwargs)


class TestRetryPolicy:
    def test_disabled(self):
        policy = RetryPolicy.disabled()
        assert policy.max_retries == 0

    def test_rejects_negative_values(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_retries=-1)
        with pytest.raises(ValueError):
            RetryPolicy(base_delay=-0.5)


class TestUploadTarget:
    def test_file_url_strips_signature(self):
        target = UploadTarget("https://storage.test/a/b.html?X-Amz-Signature=abc#frag")
        assert target.file_url == "https://storage.test/a/b.html"
