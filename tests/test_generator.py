"""
Тесты для генератора по документам .nswag
"""

import asyncio
import shutil

import httpx
import pytest

from helpers import fixture_path, make_document, read_fixture
from nswag_generator.cache import ResultCache
from nswag_generator.config import GeneratorOptions
from nswag_generator.diagnostics import DIAGNOSTIC_ID
from nswag_generator.exceptions import (
    DocumentReadError,
    EmptyDocument,
    UnsupportedOperationNamingMode,
)
from nswag_generator.generator import (
    IncrementalGenerator,
    NSwagGenerator,
    is_document_path,
    output_name,
)
from nswag_generator.internal.mapper.settings import map_settings
from nswag_generator.internal.parser.document import load_document_file
from nswag_generator.internal.parser.openapi import resolve_api_description


@pytest.fixture
def petstore_document(tmp_path, write_document):
    """Документ, ссылающийся на petstore.json рядом с ним"""
    shutil.copy(fixture_path("petstore.json"), tmp_path / "petstore.json")
    return write_document(
        "petstore.nswag",
        make_document({"url": "petstore.json"}, {"namespace": "Petstore"}),
    )


class CountingResolver:
    """Обертка над получением описания, считающая вызовы"""

    def __init__(self):
        self.calls = 0

    async def __call__(self, from_document, base_folder, http_client=None):
        self.calls += 1
        return await resolve_api_description(from_document, base_folder, http_client)


class TestPaths:
    """Имена документов и результатов"""

    @pytest.mark.parametrize(
        "path,expected",
        [("api.nswag", True), ("API.NSWAG", True), ("api.json", False), ("nswag", False)],
    )
    def test_is_document_path(self, path, expected):
        assert is_document_path(path) is expected

    def test_output_name(self):
        assert output_name("/work/specs/petstore.nswag") == "petstore.nswag.py"


class TestGenerateOne:
    """Генерация для одного документа"""

    @pytest.mark.asyncio
    async def test_generate_from_file_reference(self, petstore_document):
        """Описание по относительному пути от документа"""
        source = await NSwagGenerator().generate_one(petstore_document)

        assert '"""Petstore\nPetstore 1.0.0\n"""' in source
        assert "class PetsClient:" in source
        compile(source, petstore_document, "exec")

    @pytest.mark.asyncio
    async def test_relative_yaml_file(self, tmp_path, write_document):
        """YAML описание во вложенной директории"""
        (tmp_path / "specs").mkdir()
        shutil.copy(fixture_path("petstore.yaml"), tmp_path / "specs" / "petstore.yaml")
        path = write_document(
            "petstore.nswag", make_document({"url": "specs/petstore.yaml"})
        )

        source = await NSwagGenerator().generate_one(path)
        assert "class Pet(BaseModel):" in source

    @pytest.mark.asyncio
    async def test_remote_description(self, write_document):
        """Описание по HTTPS через переданный клиент"""
        requested = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, text=read_fixture("swagger2.json"))

        path = write_document(
            "legacy.nswag",
            make_document({"url": "https://legacy.example.com/swagger/v1/swagger.json"}),
        )

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            source = await NSwagGenerator(http_client=client).generate_one(path)

        assert requested == ["https://legacy.example.com/swagger/v1/swagger.json"]
        assert "class UsersClient:" in source

    @pytest.mark.asyncio
    async def test_errors_propagate(self, tmp_path, write_document):
        """generate_one пробрасывает ошибки конвейера"""
        generator = NSwagGenerator()

        with pytest.raises(DocumentReadError):
            await generator.generate_one(tmp_path / "missing.nswag")

        with pytest.raises(EmptyDocument):
            await generator.generate_one(write_document("empty.nswag", "{}"))

        path = write_document(
            "mode.nswag",
            make_document(
                {"json": read_fixture("petstore.json")},
                {"operationGenerationMode": "MultipleClientsFromFirstTagAndOperationName"},
            ),
        )
        with pytest.raises(UnsupportedOperationNamingMode):
            await generator.generate_one(path)

    @pytest.mark.asyncio
    async def test_custom_engine(self, petstore_document):
        """Движок генерации подменяется"""
        seen = []

        def engine(api, settings):
            seen.append((api.title, settings.namespace))
            return "# generated\n"

        source = await NSwagGenerator(engine=engine).generate_one(petstore_document)

        assert source == "# generated\n"
        assert seen == [("Petstore", "Petstore")]

    @pytest.mark.asyncio
    async def test_inline_json_matches_direct_generation(self, write_document):
        """Inline JSON в документе дает тот же код, что и прямая генерация"""
        text = read_fixture("petstore.json")
        raw = make_document({"json": text}, {"generateSyncMethods": True})
        path = write_document("inline.nswag", raw)
        generator = NSwagGenerator()

        settings = map_settings(load_document_file(path).settings)

        assert await generator.generate_one(path) == generator.generate_from_json(
            text, settings
        )


class TestCache:
    """Кэширование результатов по пути"""

    @pytest.mark.asyncio
    async def test_cached_result_reused(self, petstore_document):
        """Повторный вызов не обращается к описанию"""
        resolver = CountingResolver()
        generator = NSwagGenerator(
            options=GeneratorOptions(use_cache=True), resolver=resolver
        )

        first = await generator.generate_one(petstore_document)
        second = await generator.generate_one(petstore_document)

        assert first == second
        assert resolver.calls == 1
        assert petstore_document in generator.cache

    @pytest.mark.asyncio
    async def test_cache_disabled(self, petstore_document):
        resolver = CountingResolver()
        generator = NSwagGenerator(resolver=resolver)

        await generator.generate_one(petstore_document)
        await generator.generate_one(petstore_document)

        assert resolver.calls == 2
        assert len(generator.cache) == 0

    @pytest.mark.asyncio
    async def test_shared_cache(self, petstore_document):
        """Кэш передается снаружи и может быть очищен"""
        cache = ResultCache()
        cache.set(petstore_document, "# cached\n")
        generator = NSwagGenerator(options=GeneratorOptions(use_cache=True), cache=cache)

        assert await generator.generate_one(petstore_document) == "# cached\n"

        cache.discard(petstore_document)
        assert "class PetsClient:" in await generator.generate_one(petstore_document)

    def test_result_cache(self):
        cache = ResultCache()
        cache.set("a.nswag", "1")
        cache.set("a.nswag", "2")

        assert cache.get("a.nswag") == "2"
        assert cache.get("b.nswag") is None

        cache.clear()
        assert len(cache) == 0


class TestGenerateBatch:
    """Пакетная генерация"""

    @pytest.mark.asyncio
    async def test_failures_are_isolated(self, tmp_path, write_document):
        """Ошибка одного документа не влияет на остальные"""
        text = read_fixture("petstore.json")
        paths = [
            write_document("one.nswag", make_document({"json": text})),
            write_document("two.nswag", b"{not json"),
            write_document("three.nswag", make_document({"json": text})),
        ]

        results = await NSwagGenerator().generate_batch(paths)

        assert [result.path for result in results] == paths
        assert [result.ok for result in results] == [True, False, True]
        assert results[0].output.name == "one.nswag.py"
        assert results[0].output.source == results[2].output.source

        diagnostic = results[1].diagnostic
        assert diagnostic.id == DIAGNOSTIC_ID
        assert diagnostic.location is None
        assert diagnostic.path == paths[1]
        assert diagnostic.message.startswith("MalformedConfig: ")
        assert str(diagnostic).startswith("error NSG001: ")

    @pytest.mark.asyncio
    async def test_concurrency_limit(self, write_document):
        """Одновременно выполняется не больше max_concurrency документов"""
        active = 0
        peak = 0

        async def resolver(from_document, base_folder, http_client=None):
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.01)
            active -= 1
            return await resolve_api_description(from_document, base_folder, http_client)

        text = read_fixture("petstore.yaml")
        paths = [
            write_document(f"doc{i}.nswag", make_document({"json": text})) for i in range(5)
        ]
        generator = NSwagGenerator(
            options=GeneratorOptions(max_concurrency=2), resolver=resolver
        )

        results = await generator.generate_batch(paths)

        assert all(result.ok for result in results)
        assert peak <= 2

    @pytest.mark.asyncio
    async def test_zero_concurrency_does_not_hang(self, write_document):
        """max_concurrency=0 работает как 1"""
        text = read_fixture("petstore.json")
        paths = [
            write_document(f"doc{i}.nswag", make_document({"json": text})) for i in range(2)
        ]
        generator = NSwagGenerator(options=GeneratorOptions(max_concurrency=0))

        results = await asyncio.wait_for(generator.generate_batch(paths), 5)

        assert [result.ok for result in results] == [True, True]

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, write_document):
        """Отмена пакета дает CancelledError, а не диагностику NSG001"""
        started = asyncio.Event()

        async def resolver(from_document, base_folder, http_client=None):
            started.set()
            await asyncio.Event().wait()

        path = write_document(
            "slow.nswag", make_document({"json": read_fixture("petstore.json")})
        )
        generator = NSwagGenerator(resolver=resolver)

        task = asyncio.create_task(generator.generate_batch([path]))
        await asyncio.wait_for(started.wait(), 5)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

    @pytest.mark.asyncio
    async def test_empty_batch(self):
        assert await NSwagGenerator().generate_batch([]) == []


class TestIncrementalGenerator:
    """Долгоживущая сессия"""

    def test_only_documents_tracked(self):
        session = IncrementalGenerator()
        session.update(["a.nswag", "b.json", "C.NSWAG", "a.nswag"])

        assert session.paths == ("a.nswag", "C.NSWAG")

    def test_add_and_remove(self):
        session = IncrementalGenerator()
        session.add("a.nswag")
        session.add("a.nswag")
        session.add("readme.md")
        session.remove("missing.nswag")

        assert session.paths == ("a.nswag",)

        session.remove("a.nswag")
        assert session.paths == ()

    @pytest.mark.asyncio
    async def test_run(self, petstore_document, write_document):
        """run() перегенерирует каждый документ независимо"""
        broken = write_document("broken.nswag", "null")
        session = IncrementalGenerator()
        session.update([petstore_document, broken])

        results = await session.run()

        assert [result.ok for result in results] == [True, False]
        assert results[1].diagnostic.message.startswith("EmptyDocument: ")

        session.remove(broken)
        assert [result.ok for result in await session.run()] == [True]

    @pytest.mark.asyncio
    async def test_run_uses_settings(self, write_document):
        """Настройки документа попадают в движок"""
        path = write_document(
            "named.nswag",
            make_document(
                {"json": read_fixture("petstore.json")}, {"className": "{controller}Api"}
            ),
        )
        session = IncrementalGenerator()
        session.add(path)

        (result,) = await session.run()
        assert "class PetsApi:" in result.output.source
