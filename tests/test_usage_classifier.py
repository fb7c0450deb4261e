"""Tests for the usage classifier engine."""

from __future__ import annotations

import warnings
from collections import Counter
from pathlib import Path

import pytest

from dephealth.engines.dependency_scanner.models import Ecosystem
from dephealth.engines.usage_classifier.classifier import (
    classify,
    classify_usage,
    python_module_names,
)
from dephealth.engines.usage_classifier.imports import (
    count_references,
    iter_source_files,
    js_imports,
    js_package_name,
    python_imports,
)


def _write(root: Path, rel: str, content: str) -> None:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


# ── Python imports ───────────────────────────────────────────────────────


class TestPythonImports:
    def test_import_forms(self):
        source = (
            "import os\n"
            "import requests.adapters\n"
            "import numpy as np, yaml\n"
            "from flask import Flask\n"
            "from . import sibling\n"
            "from .pkg import thing\n"
            "def f():\n"
            "    import bs4\n"
        )
        assert sorted(python_imports(source)) == sorted(
            ["os", "requests", "numpy", "yaml", "flask", "bs4"]
        )

    def test_unparsable_source_falls_back_to_lines(self):
        source = "import requests\nfrom flask import Flask\ndef broken(:\n"
        assert sorted(python_imports(source)) == ["flask", "requests"]

    def test_deeply_nested_source_falls_back_to_lines(self):
        source = "import requests\nx = " + "1+" * 200000 + "1\n"
        assert python_imports(source) == ["requests"]

    def test_invalid_escape_warning_suppressed(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            assert python_imports('import re\npattern = "\\d"\n') == ["re"]
        assert caught == []


# ── JavaScript imports ───────────────────────────────────────────────────


class TestJsImports:
    @pytest.mark.parametrize(
        ("specifier", "expected"),
        [
            ("lodash", "lodash"),
            ("lodash/fp", "lodash"),
            ("@babel/core", "@babel/core"),
            ("@babel/core/lib/x", "@babel/core"),
            ("./local", None),
            ("../up", None),
            ("/abs/path", None),
            ("node:fs", None),
            ("@scope", None),
        ],
    )
    def test_package_name(self, specifier, expected):
        assert js_package_name(specifier) == expected

    def test_import_forms(self):
        source = (
            "import React from 'react';\n"
            'import { debounce } from "lodash";\n'
            "import 'normalize.css';\n"
            "const axios = require('axios');\n"
            "const lazy = import('chart.js');\n"
            "export * from '@scope/pkg/sub';\n"
            "import helper from './helper';\n"
        )
        assert sorted(js_imports(source)) == sorted(
            ["react", "lodash", "normalize.css", "axios", "chart.js", "@scope/pkg"]
        )


# ── Source walk ──────────────────────────────────────────────────────────


class TestSourceWalk:
    def test_skips_vendored_dirs(self, tmp_path):
        _write(tmp_path, "src/app.js", "require('express')")
        _write(tmp_path, "node_modules/express/index.js", "require('lodash')")
        _write(tmp_path, ".git/hooks/x.js", "require('lodash')")
        _write(tmp_path, "README.md", "require('lodash')")

        files = [p.relative_to(tmp_path).as_posix() for p in iter_source_files(tmp_path, frozenset({".js"}))]
        assert files == ["src/app.js"]
        assert count_references(tmp_path, python=False) == Counter({"express": 1})

    def test_counts_every_reference(self, tmp_path):
        _write(tmp_path, "a.py", "import requests\n")
        _write(tmp_path, "pkg/b.py", "import requests\nfrom requests import get\n")
        assert count_references(tmp_path, python=True)["requests"] == 3


# ── Classification ───────────────────────────────────────────────────────


class TestPythonModuleNames:
    @pytest.mark.parametrize(
        ("dist", "modules"),
        [
            ("requests", ("requests",)),
            ("Flask-Cors", ("flask_cors",)),
            ("beautifulsoup4", ("bs4",)),
            ("PyYAML", ("yaml",)),
            ("scikit_learn", ("sklearn",)),
        ],
    )
    def test_mapping(self, dist, modules):
        assert python_module_names(dist) == modules


class TestClassify:
    def test_pip_aliases_and_case(self):
        references = Counter({"yaml": 2, "PIL": 1, "flask_cors": 1})
        records = classify(["PyYAML", "pillow", "Flask-Cors", "django"], references, Ecosystem.PIP)
        assert [(r.name, r.used, r.import_count) for r in records] == [
            ("PyYAML", True, 2),
            ("pillow", True, 1),
            ("Flask-Cors", True, 1),
            ("django", False, 0),
        ]

    def test_npm_exact_names(self):
        records = classify(["react", "@babel/core"], Counter({"react": 3}), Ecosystem.NPM)
        assert records[0].to_dict() == {"name": "react", "used": True, "importCount": 3}
        assert records[1].to_dict() == {"name": "@babel/core", "used": False, "importCount": 0}

    def test_empty_project_marks_everything_unused(self, tmp_path):
        records = classify_usage(tmp_path, ["lodash", "react"], Ecosystem.NPM)
        assert [r.used for r in records] == [False, False]

    def test_deterministic(self, tmp_path):
        _write(tmp_path, "index.js", "import x from 'react'\nrequire('lodash')\n")
        _write(tmp_path, "lib/util.js", "require('lodash')\n")
        names = ["react", "lodash", "jest"]
        first = classify_usage(tmp_path, names, Ecosystem.NPM)
        second = classify_usage(tmp_path, names, Ecosystem.NPM)
        assert first == second
        assert [r.import_count for r in first] == [1, 2, 0]
