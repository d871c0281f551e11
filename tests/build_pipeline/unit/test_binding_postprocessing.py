"""Binding post-processing tests."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from cosmwasm_bindings.binding_generation import BindingGenerationError
from cosmwasm_bindings.build_pipeline import finalize_bindings, is_finalized
from cosmwasm_bindings.configuration import ConsolidationSettings
from cosmwasm_bindings.schema_management import NestedQuery

_RECORDS = {
    "Gamma": {
        "OracleResponse": NestedQuery(
            "oracle", "OracleQuery", ("TaxRateResponse", "TaxCapResponse")
        )
    }
}


def _finalize(output_dir: Path, *, react_query: bool = True, context_module: bool = False):
    return asyncio.run(
        finalize_bindings(
            output_dir,
            _RECORDS,
            ConsolidationSettings(),
            bundle_file="index.ts",
            react_query=react_query,
            context_module=context_module,
        )
    )


def _snapshot(output_dir: Path) -> dict[str, str]:
    return {
        path.name: path.read_text(encoding="utf-8") for path in sorted(output_dir.iterdir())
    }


def test_finalize_consolidates_patches_and_marks_index(
    tmp_path: Path, generated_contracts, write_bindings
) -> None:
    write_bindings(tmp_path, generated_contracts, react_query=True)
    original_index = (tmp_path / "index.ts").read_text(encoding="utf-8")

    registry = _finalize(tmp_path, context_module=True)

    assert registry is not None
    assert registry.names() == ("Uint128", "Coin", "OracleQuery", "Decimal")
    index = (tmp_path / "index.ts").read_text(encoding="utf-8")
    assert index == original_index + '\nexport * from "./types";'
    assert (tmp_path / "types.ts").exists()
    assert (tmp_path / "context.ts").exists()
    gamma_client = (tmp_path / "Gamma.client.ts").read_text(encoding="utf-8")
    assert 'import {OracleQuery, Decimal, Uint128} from "./types";' in gamma_client
    assert "oracle: (input: OracleQuery) => Promise<OracleResponse>;" in gamma_client
    gamma_hooks = (tmp_path / "Gamma.react-query.ts").read_text(encoding="utf-8")
    assert "client.oracle(input)" in gamma_hooks
    assert 'import { GammaQueryClient } from "./Gamma.client";' in gamma_hooks


def test_second_finalize_is_a_no_op(tmp_path: Path, generated_contracts, write_bindings) -> None:
    write_bindings(tmp_path, generated_contracts, react_query=True)
    _finalize(tmp_path)
    finalized = _snapshot(tmp_path)

    assert _finalize(tmp_path) is None
    assert _snapshot(tmp_path) == finalized


def test_context_module_is_optional(tmp_path: Path, generated_contracts, write_bindings) -> None:
    write_bindings(tmp_path, generated_contracts, react_query=False)

    _finalize(tmp_path, react_query=False)

    assert not (tmp_path / "context.ts").exists()
    assert not (tmp_path / "Gamma.react-query.ts").exists()


def test_missing_react_query_module_raises(
    tmp_path: Path, generated_contracts, write_bindings
) -> None:
    write_bindings(tmp_path, generated_contracts, react_query=False)

    with pytest.raises(
        BindingGenerationError, match=r"Generated module not found: .*\.react-query\.ts"
    ):
        _finalize(tmp_path, react_query=True)


def test_missing_index_raises(tmp_path: Path) -> None:
    with pytest.raises(BindingGenerationError, match="Aggregate module not found"):
        _finalize(tmp_path)


def test_index_without_type_modules_raises(tmp_path: Path) -> None:
    (tmp_path / "index.ts").write_text("export {};\n", encoding="utf-8")

    with pytest.raises(BindingGenerationError, match="No generated type modules"):
        _finalize(tmp_path)


def test_is_finalized_detects_shared_reexport() -> None:
    assert is_finalized('import * as _0 from "./Alpha.types";\nexport * from "./types";')
    assert not is_finalized('import * as _0 from "./Alpha.types";\nexport * from "./Alpha.types";')
