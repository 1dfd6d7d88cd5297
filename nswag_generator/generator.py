"""
Главный модуль генератора: документ .nswag -> исходный код клиента
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, List, Optional, Tuple, Union

import httpx

from .cache import ResultCache
from .config import GeneratorOptions
from .diagnostics import Diagnostic, report_exception
from .internal.generator import generate_client_code
from .internal.mapper.settings import map_settings
from .internal.parser.document import load_document, read_document_bytes
from .internal.parser.openapi import ApiDescription, resolve_api_description
from .internal.types.document import FromDocument
from .internal.types.settings import NormalizedGeneratorSettings

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIX = ".nswag"
OUTPUT_SUFFIX = ".py"

PathType = Union[str, os.PathLike]
Engine = Callable[[ApiDescription, NormalizedGeneratorSettings], str]
Resolver = Callable[
    [FromDocument, str, Optional[httpx.AsyncClient]], Awaitable[ApiDescription]
]


def is_document_path(path: PathType) -> bool:
    return os.fspath(path).lower().endswith(DOCUMENT_SUFFIX)


def output_name(path: PathType) -> str:
    """petstore.nswag -> petstore.nswag.py"""
    return os.path.basename(os.fspath(path)) + OUTPUT_SUFFIX


@dataclass(frozen=True)
class GeneratedOutput:
    name: str
    source: str


@dataclass(frozen=True)
class GenerationResult:
    path: str
    output: Optional[GeneratedOutput] = None
    diagnostic: Optional[Diagnostic] = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None


class NSwagGenerator:
    """
    Генерация кода клиента по документам .nswag.

    Цепочка: чтение документа -> разбор -> получение описания API ->
    отображение настроек -> движок генерации. Результат кэшируется по пути
    документа, если включен options.use_cache.
    """

    def __init__(
        self,
        options: Optional[GeneratorOptions] = None,
        cache: Optional[ResultCache] = None,
        engine: Optional[Engine] = None,
        resolver: Optional[Resolver] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.options = options or GeneratorOptions()
        self.cache = cache if cache is not None else ResultCache()
        self.engine = engine or generate_client_code
        self.resolver = resolver or resolve_api_description
        self.http_client = http_client

    async def generate_one(self, path: PathType) -> str:
        """Генерация для одного документа, ошибки пробрасываются"""
        path = os.fspath(path)

        if self.options.use_cache:
            cached = self.cache.get(path)
            if cached is not None:
                logger.debug("Результат для %s взят из кэша", path)
                return cached

        data = await asyncio.to_thread(read_document_bytes, path)
        document = load_document(data)

        base_folder = os.path.dirname(os.path.abspath(path))
        api = await self.resolver(document.from_document, base_folder, self.http_client)

        settings = map_settings(document.settings)
        source = self.engine(api, settings)
        logger.info("Сгенерирован код для %s", path)

        if self.options.use_cache:
            self.cache.set(path, source)

        return source

    async def generate_output(self, path: PathType) -> GeneratedOutput:
        source = await self.generate_one(path)
        return GeneratedOutput(name=output_name(path), source=source)

    def generate_from_json(
        self, text: str, settings: NormalizedGeneratorSettings
    ) -> str:
        """Генерация напрямую из JSON описания API"""
        return self.engine(ApiDescription.from_json(text), settings)

    async def generate_batch(self, paths: Iterable[PathType]) -> List[GenerationResult]:
        """
        Генерация для набора документов.

        Документы обрабатываются независимо: ошибка одного превращается
        в диагностику и не влияет на остальные. Порядок результатов
        совпадает с порядком путей.
        """
        semaphore = asyncio.Semaphore(max(1, self.options.max_concurrency))

        async def run(path: str) -> GenerationResult:
            async with semaphore:
                try:
                    output = await self.generate_output(path)
                except Exception as e:
                    diagnostic = report_exception(e, path)
                    logger.error("Ошибка генерации %s: %s", path, diagnostic.message)
                    return GenerationResult(path=path, diagnostic=diagnostic)

            return GenerationResult(path=path, output=output)

        return list(await asyncio.gather(*(run(os.fspath(p)) for p in paths)))


class IncrementalGenerator:
    """
    Долгоживущая сессия генерации.

    Хранит набор известных документов (только *.nswag) и по run()
    перегенерирует каждый из них независимо.
    """

    def __init__(self, generator: Optional[NSwagGenerator] = None):
        self.generator = generator or NSwagGenerator()
        self._paths: List[str] = []

    @property
    def paths(self) -> Tuple[str, ...]:
        return tuple(self._paths)

    def update(self, paths: Iterable[PathType]) -> None:
        """Замена набора известных документов"""
        self._paths = []
        for path in paths:
            self.add(path)

    def add(self, path: PathType) -> None:
        path = os.fspath(path)
        if is_document_path(path) and path not in self._paths:
            self._paths.append(path)

    def remove(self, path: PathType) -> None:
        path = os.fspath(path)
        if path in self._paths:
            self._paths.remove(path)

    async def run(self) -> List[GenerationResult]:
        logger.debug("Инкрементальная генерация: %d документов", len(self._paths))
        return await self.generator.generate_batch(self._paths)
