"""
Bundling of a schema and the files it references into one document.

Every external ``$ref`` target (a whole file or ``file#/pointer``) is copied
into the root document's definitions container and the reference is rewritten
to point there. References inside the copied targets are handled the same way,
so the result only holds local references. Remote references (``scheme://``)
are kept as they are.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .errors import BundleError, InputNotFoundError

log = logging.getLogger(__name__)

# Keywords meaningless once a document is embedded in another one
_RESOURCE_KEYWORDS = ("$schema", "$id")


def split_ref(ref: str) -> tuple[str, str]:
    """
    Split a $ref into its file part and its JSON pointer.

    Examples:
        "b.json#/$defs/Item" -> ("b.json", "/$defs/Item")
        "b.json"             -> ("b.json", "")
        "#/$defs/Item"       -> ("", "/$defs/Item")
    """
    if "#" not in ref:
        return ref, ""
    path, pointer = ref.split("#", 1)
    return path, pointer


def _decode_pointer_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def _encode_pointer_token(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def resolve_pointer(document: Any, pointer: str, context: str = "") -> Any:
    """Resolve a JSON pointer ("" is the whole document) inside a loaded document."""
    if pointer == "":
        return document
    if not pointer.startswith("/"):
        raise BundleError(f"Unsupported JSON pointer '{pointer}' in {context}")

    current = document
    for raw_token in pointer[1:].split("/"):
        token = _decode_pointer_token(raw_token)
        if isinstance(current, list):
            try:
                current = current[int(token)]
            except (ValueError, IndexError) as e:
                raise BundleError(f"Cannot resolve '#{pointer}' in {context}: no item '{token}'") from e
        elif isinstance(current, dict):
            if token not in current:
                raise BundleError(f"Cannot resolve '#{pointer}' in {context}: no key '{token}'")
            current = current[token]
        else:
            raise BundleError(f"Cannot resolve '#{pointer}' in {context}: '{token}' is not a container")
    return current


class SchemaBundler:
    """Bundles the external references of one root schema file."""

    def __init__(self, input_path: str | Path):
        self.root_path = Path(input_path).resolve()
        self.defs_key = "$defs"
        self._documents: dict[Path, Any] = {}
        self._hoisted: dict[tuple[Path, str], str] = {}
        self._definitions: dict[str, Any] = {}
        self._reserved: set[str] = set()

    def bundle(self) -> Any:
        """
        Build the bundled document.

        Returns:
            The root document with every external reference inlined

        Raises:
            BundleError: If a referenced file or pointer cannot be resolved
        """
        root = self._load(self.root_path)
        if not isinstance(root, dict):
            return root

        if "definitions" in root and "$defs" not in root:
            self.defs_key = "definitions"
        existing = root.get(self.defs_key)
        if isinstance(existing, dict):
            self._reserved.update(existing)

        bundled = self._walk(root, self.root_path, in_root=True)
        if self._definitions:
            bundled.setdefault(self.defs_key, {}).update(self._definitions)
            log.debug("Inlined %d external definitions into %s", len(self._definitions), self.defs_key)
        return bundled

    def _load(self, path: Path) -> Any:
        if path not in self._documents:
            if not path.exists():
                raise BundleError(f"Cannot resolve reference to {path}: file does not exist")
            try:
                with open(path, encoding="utf-8") as f:
                    self._documents[path] = json.load(f)
            except json.JSONDecodeError as e:
                raise BundleError(f"Cannot parse {path}: {e}") from e
            log.debug("Loaded %s", path)
        return self._documents[path]

    def _walk(self, node: Any, base: Path, in_root: bool) -> Any:
        if isinstance(node, dict):
            out = {}
            for key, value in node.items():
                if key == "$ref" and isinstance(value, str):
                    out[key] = self._rewrite_ref(value, base, in_root)
                else:
                    out[key] = self._walk(value, base, in_root)
            return out
        if isinstance(node, list):
            return [self._walk(item, base, in_root) for item in node]
        return node

    def _rewrite_ref(self, ref: str, base: Path, in_root: bool) -> str:
        if "://" in ref:
            return ref

        path_part, pointer = split_ref(ref)
        if not path_part:
            if in_root:
                return ref
            target = base
        else:
            target = (base.parent / path_part).resolve()
            if target == self.root_path:
                return f"#{pointer}"

        name = self._hoist(target, pointer)
        return f"#/{self.defs_key}/{_encode_pointer_token(name)}"

    def _hoist(self, path: Path, pointer: str) -> str:
        key = (path, pointer)
        if key in self._hoisted:
            return self._hoisted[key]

        name = self._unique_name(path, pointer)
        # Registered before walking so that cyclic references terminate
        self._hoisted[key] = name
        self._definitions[name] = None

        target = resolve_pointer(self._load(path), pointer, str(path))
        if isinstance(target, dict) and pointer == "":
            target = {k: v for k, v in target.items() if k not in _RESOURCE_KEYWORDS}
        self._definitions[name] = self._walk(target, path, in_root=False)
        log.debug("Inlined %s#%s as %s", path.name, pointer, name)
        return name

    def _unique_name(self, path: Path, pointer: str) -> str:
        if pointer.strip("/"):
            base_name = _decode_pointer_token(pointer.rstrip("/").split("/")[-1])
        else:
            base_name = path.name
            for suffix in (".json", ".schema"):
                base_name = base_name.removesuffix(suffix)

        candidate = base_name
        index = 1
        while candidate in self._definitions or candidate in self._reserved:
            index += 1
            candidate = f"{base_name}_{index}"
        return candidate


def bundle_schema(input_path: str | Path) -> Any:
    """
    Bundle a schema file with everything it references.

    Args:
        input_path: Path to the root schema file

    Returns:
        The bundled document

    Raises:
        InputNotFoundError: If input_path does not exist
        BundleError: If a reference cannot be resolved
    """
    if not Path(input_path).exists():
        raise InputNotFoundError(f"Input file does not exist: {input_path}")
    try:
        return SchemaBundler(input_path).bundle()
    except BundleError as e:
        raise BundleError(f"Failed to bundle schema: {e}") from e
