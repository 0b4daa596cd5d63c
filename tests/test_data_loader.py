"""
데이터 로더 테스트 모듈
=====================

이 모듈은 PrefectureDataLoader 클래스와 관련 함수의 기능을 테스트합니다.

테스트 항목:
- HTTP / 로컬 파일 데이터 로드
- 실패 응답 및 잘못된 JSON 처리
- image_paths 자동 생성
- 전역 접근자 및 초기화 함수
- 조회 및 통계 정보

작성자: AI Assistant
버전: 1.0.0
"""

import io
import json
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import MagicMock, patch

import requests

# 상위 디렉토리를 Python 경로에 추가
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from src.core import data_loader
from src.core.data_loader import (
    NOT_LOADED,
    AppState,
    EmptyDocumentError,
    FetchError,
    LoadResult,
    ParseError,
    PrefectureDataLoader,
    ensure_image_paths,
    fetch_data,
)
from src.utils.helpers import create_image_paths

DATA_URL = "http://example.com/data/data.json"

def make_response(ok=True, status_code=200, text=""):
    """requests.Response 대용 목 객체를 만듭니다."""
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.text = text
    return response

class TestEnsureImagePaths(unittest.TestCase):
    """
    ensure_image_paths 함수의 테스트 케이스
    """

    def test_synthesizes_from_prefectures(self):
        data = {"prefectures": ["A", "B"]}
        result = ensure_image_paths(data)
        self.assertEqual(result["image_paths"], create_image_paths(["A", "B"]))
        # 원본은 수정하지 않음
        self.assertNotIn("image_paths", data)

    def test_keeps_existing_image_paths(self):
        data = {"prefectures": ["A"], "image_paths": [["x.png", "y.png"]]}
        self.assertIs(ensure_image_paths(data), data)

    def test_replaces_non_list_image_paths(self):
        data = {"prefectures": ["A"], "image_paths": "not-a-list"}
        result = ensure_image_paths(data)
        self.assertEqual(result["image_paths"], create_image_paths(["A"]))

    def test_without_prefectures(self):
        data = {"other": 1}
        self.assertIs(ensure_image_paths(data), data)
        data = {"prefectures": "A,B"}
        self.assertIs(ensure_image_paths(data), data)

    def test_non_dict_documents(self):
        self.assertEqual(ensure_image_paths([1, 2]), [1, 2])
        self.assertIsNone(ensure_image_paths(None))

class TestFetchData(unittest.IsolatedAsyncioTestCase):
    """
    fetch_data 함수의 테스트 케이스
    """

    @patch("src.core.data_loader.requests.get")
    async def test_fetch_success(self, mock_get):
        mock_get.return_value = make_response(text='{"prefectures": ["Tokyo"]}')
        data = await fetch_data(DATA_URL, timeout=5)
        self.assertEqual(data, {"prefectures": ["Tokyo"]})
        mock_get.assert_called_once_with(DATA_URL, timeout=5)

    @patch("src.core.data_loader.requests.get")
    async def test_fetch_failure_status(self, mock_get):
        mock_get.return_value = make_response(ok=False, status_code=404)
        with self.assertRaises(FetchError):
            await fetch_data(DATA_URL)

    @patch("src.core.data_loader.requests.get")
    async def test_fetch_connection_error(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("refused")
        with self.assertRaises(FetchError) as ctx:
            await fetch_data(DATA_URL)
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)

    @patch("src.core.data_loader.requests.get")
    async def test_fetch_malformed_json(self, mock_get):
        mock_get.return_value = make_response(text="{not json")
        with self.assertRaises(ParseError) as ctx:
            await fetch_data(DATA_URL)
        self.assertIsInstance(ctx.exception.__cause__, json.JSONDecodeError)

    async def test_fetch_local_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "data.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump({"prefectures": ["北海道"]}, f, ensure_ascii=False)
            data = await fetch_data(path)
        self.assertEqual(data, {"prefectures": ["北海道"]})

    async def test_fetch_missing_local_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FetchError):
                await fetch_data(os.path.join(tmp, "missing.json"))

class TestPrefectureDataLoader(unittest.IsolatedAsyncioTestCase):
    """
    PrefectureDataLoader 클래스의 테스트 케이스
    """

    def setUp(self):
        """
        테스트 설정 메서드
        각 테스트 메서드 실행 전에 호출됩니다.
        """
        self.state = AppState()
        self.loader = PrefectureDataLoader(self.state, url=DATA_URL)

    @patch("src.core.data_loader.requests.get")
    async def test_initialize_synthesizes_image_paths(self, mock_get):
        mock_get.return_value = make_response(text='{"prefectures": ["A", "B"]}')
        output = io.StringIO()
        with redirect_stdout(output):
            result = await self.loader.initialize()

        self.assertTrue(result.ok)
        self.assertEqual(self.state.get_data()["image_paths"], create_image_paths(["A", "B"]))
        self.assertIs(result.data, self.state.get_data())
        # 최종 상태가 진단으로 출력됨
        self.assertIn("pie_label_01_B.png", output.getvalue())

    @patch("src.core.data_loader.requests.get")
    async def test_initialize_failure_keeps_state_absent(self, mock_get):
        mock_get.return_value = make_response(ok=False, status_code=500)
        output = io.StringIO()
        with redirect_stdout(output):
            result = await self.loader.initialize()

        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, FetchError)
        self.assertIs(self.state.get_data(), NOT_LOADED)
        self.assertFalse(self.state.is_loaded())
        self.assertIn("❌", output.getvalue())

    @patch("src.core.data_loader.requests.get")
    async def test_initialize_failure_keeps_previous_state(self, mock_get):
        self.state.set_data({"prefectures": ["old"]})
        mock_get.return_value = make_response(text="[broken")
        with redirect_stdout(io.StringIO()):
            result = await self.loader.initialize()

        self.assertIsInstance(result.error, ParseError)
        self.assertEqual(self.state.get_data(), {"prefectures": ["old"]})

    @patch("src.core.data_loader.requests.get")
    async def test_null_document_is_rejected(self, mock_get):
        """
        JSON null 문서는 로드 실패로 처리되어 상태가 NOT_LOADED로 남는지 테스트
        """
        mock_get.return_value = make_response(text="null")
        output = io.StringIO()
        with redirect_stdout(output):
            result = await self.loader.initialize()

        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, EmptyDocumentError)
        self.assertIs(self.state.get_data(), NOT_LOADED)
        self.assertFalse(self.state.is_loaded())
        self.assertIn("❌", output.getvalue())

    async def test_invalid_utf8_file_is_swallowed(self):
        """
        UTF-8이 아닌 로컬 파일은 FetchError로 보고되고 예외가 전파되지 않는지 테스트
        """
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "data.json")
            with open(path, "wb") as f:
                f.write(b'{"prefectures": ["\xff\xfe"]}')
            loader = PrefectureDataLoader(self.state, url=path)
            with redirect_stdout(io.StringIO()):
                result = await loader.initialize()

        self.assertIsInstance(result.error, FetchError)
        self.assertIsInstance(result.error.__cause__, UnicodeDecodeError)
        self.assertIs(self.state.get_data(), NOT_LOADED)

    async def test_deeply_nested_json_is_swallowed(self):
        """
        과도하게 중첩된 JSON은 ParseError로 보고되고 예외가 전파되지 않는지 테스트
        """
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "data.json")
            with open(path, "w", encoding="utf-8") as f:
                f.write("[" * 100000 + "]" * 100000)
            loader = PrefectureDataLoader(self.state, url=path)
            with redirect_stdout(io.StringIO()):
                result = await loader.initialize()

        self.assertIsInstance(result.error, ParseError)
        self.assertIsInstance(result.error.__cause__, RecursionError)
        self.assertIs(self.state.get_data(), NOT_LOADED)

    @patch("src.core.data_loader.requests.get")
    async def test_reload_replaces_state(self, mock_get):
        mock_get.return_value = make_response(text='{"prefectures": ["A"]}')
        with redirect_stdout(io.StringIO()):
            await self.loader.initialize()
        first = self.state.get_data()

        mock_get.return_value = make_response(text='{"prefectures": ["B"]}')
        with redirect_stdout(io.StringIO()):
            await self.loader.initialize()

        self.assertEqual(first["prefectures"], ["A"])
        self.assertEqual(self.loader.get_prefectures(), ["B"])

    def test_queries_before_load(self):
        self.assertIs(self.loader.get_data(), NOT_LOADED)
        self.assertEqual(self.loader.get_prefectures(), [])
        self.assertEqual(self.loader.get_image_paths(), [])
        self.assertEqual(self.loader.get_similarity_matrix(), [])
        self.assertFalse(self.loader.get_data_statistics()['loaded'])

class TestLoaderQueries(unittest.TestCase):
    """
    로드된 데이터 조회 메서드 테스트 케이스
    """

    def setUp(self):
        self.state = AppState()
        self.state.set_data(ensure_image_paths({
            "prefectures": ["Tokyo", "Osaka", "Kyoto"],
            "similarity_matrix": [
                [1.0, 0.4, 0.2],
                [0.4, 1.0, 0.8],
                [0.2, 0.8, 1.0],
            ],
        }))
        self.loader = PrefectureDataLoader(self.state, url=DATA_URL)

    def test_get_image_pair(self):
        self.assertEqual(
            self.loader.get_image_pair(2),
            ["figs/pie_02_Kyoto.png", "figs/pie_label_02_Kyoto.png"]
        )
        with self.assertRaises(IndexError):
            self.loader.get_image_pair(3)

    def test_get_prefecture_index(self):
        self.assertEqual(self.loader.get_prefecture_index("Osaka"), 1)
        with self.assertRaises(KeyError):
            self.loader.get_prefecture_index("Nara")

    def test_get_data_statistics(self):
        stats = self.loader.get_data_statistics()
        self.assertTrue(stats['loaded'])
        self.assertEqual(stats['prefecture_count'], 3)
        self.assertEqual(stats['image_pair_count'], 3)
        self.assertTrue(stats['has_similarity_matrix'])
        self.assertAlmostEqual(stats['similarity_max'], 0.8)
        self.assertAlmostEqual(stats['similarity_min'], 0.2)
        self.assertAlmostEqual(stats['similarity_mean'], (0.4 + 0.2 + 0.8) / 3)

    @patch("src.core.data_loader.requests.get")
    def test_load_data_sync(self, mock_get):
        mock_get.return_value = make_response(text='{"prefectures": ["Nara"]}')
        with redirect_stdout(io.StringIO()):
            result = self.loader.load_data()

        self.assertIsInstance(result, LoadResult)
        self.assertEqual(self.loader.get_image_pair(0)[0], "figs/pie_00_Nara.png")

class TestGlobalAccessor(unittest.IsolatedAsyncioTestCase):
    """
    전역 접근자 및 init 함수 테스트 케이스
    """

    def tearDown(self):
        data_loader.default_state.reset()

    def test_absent_before_init(self):
        data_loader.default_state.reset()
        self.assertIs(data_loader.get_data(), NOT_LOADED)
        self.assertFalse(NOT_LOADED)

    @patch("src.core.data_loader.requests.get")
    async def test_init_swallows_errors(self, mock_get):
        mock_get.return_value = make_response(ok=False, status_code=404)
        output = io.StringIO()
        with patch.object(data_loader, "get_data_url", return_value=DATA_URL):
            with redirect_stdout(output):
                result = await data_loader.init()

        self.assertIsInstance(result, LoadResult)
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, FetchError)
        self.assertIs(data_loader.get_data(), NOT_LOADED)
        self.assertIn("데이터 초기화 중 오류 발생", output.getvalue())

    @patch("src.core.data_loader.requests.get")
    async def test_init_sets_global_state(self, mock_get):
        mock_get.return_value = make_response(text='{"prefectures": ["A", "B"]}')
        with patch.object(data_loader, "get_data_url", return_value=DATA_URL):
            with redirect_stdout(io.StringIO()):
                await data_loader.init()

        self.assertEqual(
            data_loader.get_data()["image_paths"],
            create_image_paths(["A", "B"])
        )

    @patch("src.core.data_loader.requests.get")
    async def test_init_with_injected_state(self, mock_get):
        mock_get.return_value = make_response(text='{"prefectures": []}')
        state = AppState()
        with patch.object(data_loader, "get_data_url", return_value=DATA_URL):
            with redirect_stdout(io.StringIO()):
                await data_loader.init(state)

        self.assertEqual(state.get_data(), {"prefectures": [], "image_paths": []})
        self.assertIs(data_loader.get_data(), NOT_LOADED)

if __name__ == '__main__':
    # 테스트 실행
    unittest.main()
