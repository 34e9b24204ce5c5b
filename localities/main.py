from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .core.cache import LocalityCache
from .core.config import Settings, load_settings
from .core.i18n import I18N, t
from .core.logging_config import setup_logging, get_logger
from .features.checkout import CheckoutLocalities
from .features.export import debug_sample, write_export
from .features.importer import ImportResult, LocalityImporter, UploadedFile
from .features.language import LanguageSettings
from .infra.db import Database
from .infra.migrate import migrate
from .infra.store import LocalityStore

log = get_logger(__name__)


@dataclass
class App:
    settings: Settings
    db: Database
    store: LocalityStore
    cache: LocalityCache
    importer: LocalityImporter
    language: LanguageSettings
    checkout: CheckoutLocalities

    async def close(self) -> None:
        await self.db.dispose()


async def make_app(settings: Optional[Settings] = None, bundled_path: Optional[Path] = None) -> App:
    """Build every component once and wire them explicitly."""
    settings = settings or load_settings()
    db = Database(settings.DATABASE_URL)
    await migrate(db)

    store = LocalityStore(db)
    cache = LocalityCache(store, ttl=settings.CACHE_TTL_SECONDS)
    importer = LocalityImporter(store, settings, bundled_path=bundled_path)
    language = LanguageSettings(db, cache, settings)
    checkout = CheckoutLocalities(cache, language, country_code=settings.COUNTRY_CODE)
    return App(settings, db, store, cache, importer, language, checkout)


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="localities", description="Algeria wilayas/communes data tool")
    p.add_argument("--lang", default=None, help="Message language (en, ar)")
    p.add_argument("--debug", action="store_true", help="Verbose logging")
    sub = p.add_subparsers(dest="command", required=True)

    imp = sub.add_parser("import", help="Import wilayas and communes from XML")
    imp.add_argument("--file", type=Path, default=None, help="XML file to import as an upload")

    sub.add_parser("delete", help="Delete all stored wilayas and communes")

    exp = sub.add_parser("export", help="Export stored data as JSON")
    exp.add_argument("--out", type=Path, default=Path("."), help="Output directory")

    sub.add_parser("regions", help="List wilaya codes and labels")

    com = sub.add_parser("communes", help="List communes of a wilaya (DZ-07 or 7)")
    com.add_argument("identifier")

    sub.add_parser("status", help="Show import counts")
    sub.add_parser("sample", help="Show the first stored wilayas and communes")

    lng = sub.add_parser("language", help="Show or change label language settings")
    lng.add_argument("--default", choices=["latin", "arabic"], default=None)
    lng.add_argument("--bilingual", action=argparse.BooleanOptionalAction, default=None)
    return p.parse_args(argv)


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _report_import(result: ImportResult, lang: str) -> int:
    if result.ok and result.counts is not None:
        print(t(lang, "import.success", **result.counts.to_dict()))
        return 0
    err = result.error
    assert err is not None
    print(t(lang, err.key, **err.params), file=sys.stderr)
    return 1


async def run(args: argparse.Namespace, app: App) -> int:
    lang = I18N.pick_lang(args.lang, fallback=app.settings.DEFAULT_LANG)

    if args.command == "import":
        upload = None
        if args.file is not None:
            try:
                upload = UploadedFile(args.file.name, args.file.read_bytes())
            except OSError as e:
                log.error("Cannot read %s: %s", args.file, e)
                print(t(lang, "import.missing_file"), file=sys.stderr)
                return 1
        return _report_import(await app.importer.import_localities(upload), lang)

    if args.command == "delete":
        await app.importer.delete()
        print(t(lang, "delete.success"))
        return 0

    if args.command == "export":
        path = await write_export(app.cache, app.importer, args.out)
        print(t(lang, "export.written", path=path))
        return 0

    if args.command == "regions":
        _print_json(await app.checkout.region_options())
        return 0

    if args.command == "communes":
        response = await app.checkout.load_subregions(args.identifier, lang=lang)
        _print_json(response)
        return 0 if response["success"] else 1

    if args.command == "status":
        counts = await app.importer.import_status()
        print(t(lang, "import.status", **counts.to_dict()))
        return 0

    if args.command == "sample":
        print(debug_sample(await app.cache.get_regions(), await app.cache.get_subregions(), lang=lang))
        return 0

    if args.command == "language":
        config = await app.language.get_config()
        if args.default is not None or args.bilingual is not None:
            config = await app.language.save(
                args.default or config.default_language,
                config.bilingual if args.bilingual is None else args.bilingual,
            )
            print(t(lang, "language.saved", **config.to_dict()))
        else:
            _print_json(config.to_dict())
        return 0

    return 2


async def _amain(args: argparse.Namespace) -> int:
    app = await make_app()
    try:
        return await run(args, app)
    finally:
        await app.close()


def main(argv: Optional[list[str]] = None) -> None:
    args = _parse_args(argv)
    setup_logging(debug=args.debug)
    I18N.load_locales()
    sys.exit(asyncio.run(_amain(args)))


if __name__ == "__main__":
    main()
