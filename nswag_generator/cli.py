import argparse
import asyncio
import glob
import logging
import os
import sys
from typing import Dict, List, Optional

from nswag_generator.config import GeneratorOptions
from nswag_generator.generator import (
    GenerationResult,
    IncrementalGenerator,
    NSwagGenerator,
    is_document_path,
)


def find_documents(paths: List[str]) -> List[str]:
    """Поиск .nswag документов: файлы берутся как есть, директории рекурсивно"""
    documents = []

    for path in paths:
        if os.path.isdir(path):
            pattern = os.path.join(path, "**", "*.nswag")
            documents.extend(sorted(glob.glob(pattern, recursive=True)))
        elif is_document_path(path):
            documents.append(path)
        else:
            print(f"⚠️ Пропущен {path}: не документ .nswag")

    return documents


def _save_results(
    results: List[GenerationResult], output_dir: Optional[str] = None
) -> int:
    """Сохранение результатов, возвращает число ошибок"""
    failed = 0

    for result in results:
        if not result.ok:
            failed += 1
            print(f"❌ {result.path}: {result.diagnostic}")
            continue

        target_dir = output_dir or os.path.dirname(os.path.abspath(result.path))
        os.makedirs(target_dir, exist_ok=True)
        path = os.path.join(target_dir, result.output.name)

        with open(path, "w", encoding="utf-8") as f:
            f.write(result.output.source)

        print(f"✅ {result.path} -> {path}")

    return failed


def _refresh(session: IncrementalGenerator, paths: List[str], mtimes: Dict[str, float]):
    """Обновление набора документов, измененные документы удаляются из кэша"""
    session.update(paths)

    for path in session.paths:
        try:
            mtime = os.path.getmtime(path)
        except OSError:
            # Документ удален после поиска
            session.remove(path)
            continue
        if mtimes.get(path) != mtime:
            session.generator.cache.discard(path)
            mtimes[path] = mtime

    for path in set(mtimes) - set(session.paths):
        session.generator.cache.discard(path)
        del mtimes[path]


async def _watch(session: IncrementalGenerator, args):
    """Повторная генерация по интервалу, набор документов обновляется"""
    print(f"👀 Отслеживание изменений, интервал {args.interval} с (Ctrl+C для выхода)")
    mtimes: Dict[str, float] = {}

    while True:
        _refresh(session, find_documents(args.paths), mtimes)
        _save_results(await session.run(), args.output_dir)
        await asyncio.sleep(args.interval)


def generate(argv: Optional[List[str]] = None):
    """Генерация кода клиентов по документам .nswag"""
    parser = argparse.ArgumentParser(
        description="Генерация Python клиента из документов .nswag"
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Документы .nswag или директории для поиска (по умолчанию текущая)",
    )
    parser.add_argument("--output-dir", type=str, help="Директория для результатов")
    parser.add_argument(
        "--use-cache", action="store_true", help="Кэшировать результаты по пути"
    )
    parser.add_argument(
        "--config", type=str, help="Файл настроек (nswag.toml или pyproject.toml)"
    )
    parser.add_argument(
        "--watch", action="store_true", help="Перегенерировать по интервалу"
    )
    parser.add_argument(
        "--interval", type=float, default=2.0, help="Интервал --watch в секундах"
    )
    parser.add_argument("--verbose", action="store_true", help="Подробный лог")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    options = GeneratorOptions.from_file(args.config).merge_with_args(args)
    generator = NSwagGenerator(options=options)

    if args.watch:
        try:
            asyncio.run(_watch(IncrementalGenerator(generator), args))
        except KeyboardInterrupt:
            print("\n👋 Остановлено")
        return

    documents = find_documents(args.paths)
    if not documents:
        print("❌ Документы .nswag не найдены")
        sys.exit(1)

    print(f"🚀 Генерация для {len(documents)} документов...")
    results = asyncio.run(generator.generate_batch(documents))
    failed = _save_results(results, args.output_dir)

    if failed:
        print(f"❌ Ошибок: {failed} из {len(results)}")
        sys.exit(1)

    print("✅ Генерация завершена успешно!")


if __name__ == "__main__":
    generate()
