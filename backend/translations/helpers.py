import csv
import io
import json
from pathlib import Path

from django.conf import settings

EXPORT_COLUMNS = ["key", "namespace", "en", "ne", "context", "isRequired"]


def get_locales_dir(path=None):
    return Path(path) if path else Path(settings.LOCALES_DIR)


def get_available_languages(locales_dir):
    if not locales_dir.is_dir():
        return []
    return sorted(p.name for p in locales_dir.iterdir() if p.is_dir())


def get_available_namespaces(locales_dir, lang="en"):
    lang_dir = locales_dir / lang
    if not lang_dir.is_dir():
        return []
    return sorted(p.stem for p in lang_dir.glob("*.json"))


def load_locale_file(locales_dir, lang, namespace):
    """Nested dict from ``<locales_dir>/<lang>/<namespace>.json``, empty if missing."""
    path = locales_dir / lang / f"{namespace}.json"
    if not path.is_file():
        return {}
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def flatten_dict(d, parent_key=""):
    items = {}
    for k, v in d.items():
        new_key = f"{parent_key}.{k}" if parent_key else k
        if isinstance(v, dict):
            items.update(flatten_dict(v, new_key))
        else:
            items[new_key] = str(v) if v is not None else ""
    return items


def set_nested_value(tree, path, value):
    """
    Insert ``value`` at the dotted ``path`` of ``tree``.

    Each segment becomes one level of nesting. A string already sitting on
    an intermediate segment is replaced by a dict.
    """
    segments = [segment for segment in path.split(".") if segment]
    if not segments:
        return tree

    current = tree
    for segment in segments[:-1]:
        if not isinstance(current.get(segment), dict):
            current[segment] = {}
        current = current[segment]
    current[segments[-1]] = value
    return tree


def strip_namespace(key, namespace):
    prefix = f"{namespace}."
    if namespace and key.startswith(prefix):
        return key[len(prefix):]
    return key


def parse_bool(value):
    if isinstance(value, bool):
        return value
    if value is None:
        return None
    text = str(value).strip().lower()
    if text == "":
        return None
    return text in ("true", "1", "yes")


def decode_upload(data):
    if isinstance(data, str):
        return data
    return data.decode("utf-8-sig")


def rows_to_csv(rows):
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    for row in rows:
        writer.writerow([
            row["key"],
            row["namespace"],
            row["en"],
            row["ne"],
            row["context"],
            "true" if row["isRequired"] else "false",
        ])
    return output.getvalue()


def iter_csv_rows(text):
    """
    Yield ``(line_number, row_dict)`` for each non-blank data row.

    The first row is the header; values are matched to it by column name
    so column order in the file does not matter. Quoted cells may contain
    commas, doubled quotes and newlines.
    """
    reader = csv.reader(io.StringIO(text))
    header = next(reader, None)
    if header is None:
        return
    header = [name.strip().strip('"') for name in header]

    for values in reader:
        if not any(value.strip() for value in values):
            continue
        yield reader.line_num, dict(zip(header, values))


def csv_header(text):
    reader = csv.reader(io.StringIO(text))
    return [name.strip().strip('"') for name in next(reader, [])]
