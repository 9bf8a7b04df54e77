#!/usr/bin/env python3
"""guarded-reader quickstart -- every read combination.

Demonstrates the read pipeline on sample files in a temporary directory:

1. Plain text, XML and JSON reads.
2. Encrypted reads with the reverse decryptor.
3. Authorized reads with an allow-list authorizer.
4. Authorized + encrypted reads, sync and async.
5. A denied read and how errors are reported.

Run:
    python examples/quickstart.py
"""
from __future__ import annotations

import asyncio
import logging
import tempfile
from pathlib import Path

from guarded_reader import (
    FernetTextDecryptor,
    FileReader,
    PathAllowListAuthorizer,
    ReaderError,
    ReverseTextDecryptor,
)

SAMPLES = {
    "notes.txt": "Hello from a text file",
    "report.xml": "<report><message>Hello from XML</message></report>",
    "settings.json": '{"message": "Hello from JSON"}',
}


async def main(workdir: Path) -> None:
    reverse = ReverseTextDecryptor()
    paths: dict[str, str] = {}
    for name, content in SAMPLES.items():
        (workdir / name).write_text(content, encoding="utf-8")
        (workdir / f"secret-{name}").write_text(reverse.encrypt(content), encoding="utf-8")
        paths[name] = str(workdir / name)
        paths[f"secret-{name}"] = str(workdir / f"secret-{name}")

    reader = FileReader()
    authorizer = PathAllowListAuthorizer([paths["notes.txt"], paths["secret-report.xml"]])

    # -- Step 1: Plain reads -------------------------------------------------
    print("[1] text:", reader.read_text(paths["notes.txt"]))
    tree = reader.read_xml(paths["report.xml"])
    print("    xml: ", tree.getroot().findtext("message"))
    with reader.read_json(paths["settings.json"]) as doc:
        print("    json:", doc.get_property("message"))

    # -- Step 2: Encrypted reads ---------------------------------------------
    print("[2] text:", reader.read_encrypted_text(paths["secret-notes.txt"], reverse))
    tree = reader.read_encrypted_xml(paths["secret-report.xml"], reverse)
    print("    xml: ", tree.getroot().findtext("message"))
    with reader.read_encrypted_json(paths["secret-settings.json"], reverse) as doc:
        print("    json:", doc.get_property("message"))

    # -- Step 3: Authorized reads --------------------------------------------
    print("[3] user: ", reader.read_text_authorized(paths["notes.txt"], "user", authorizer))
    with reader.read_json_authorized(paths["settings.json"], "admin", authorizer) as doc:
        print("    admin:", doc.get_property("message"))

    # -- Step 4: Authorized + encrypted ----------------------------------------
    tree = reader.read_file(
        "xml",
        paths["secret-report.xml"],
        decryptor=reverse,
        authorizer=authorizer,
        role="user",
    )
    print("[4] sync: ", tree.getroot().findtext("message"))
    text = await reader.read_file_async(
        "text",
        paths["secret-notes.txt"],
        decryptor=reverse,
        authorizer=authorizer,
        role="admin",
    )
    print("    async:", text)

    fernet = FernetTextDecryptor(FernetTextDecryptor.generate_key())
    vault = workdir / "vault.txt"
    vault.write_text(fernet.encrypt("Hello from Fernet"), encoding="ascii")
    print("    fernet:", await reader.read_encrypted_text_async(str(vault), fernet))

    # -- Step 5: Errors --------------------------------------------------------
    try:
        reader.read_xml_authorized(paths["report.xml"], "user", authorizer)
    except ReaderError as exc:
        print("[5]", exc.describe())
        print("   ", exc.to_dict())


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    with tempfile.TemporaryDirectory() as tmp:
        asyncio.run(main(Path(tmp)))
