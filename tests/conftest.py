"""Shared fixtures: contract workspaces and ts-codegen shaped output modules."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

GENERATED_HEADER = """/**
* This file was automatically generated by @cosmwasm/ts-codegen@0.35.7.
* DO NOT MODIFY IT BY HAND. Instead, modify the source JSONSchema file,
* and run the @cosmwasm/ts-codegen generate command to regenerate this file.
*/
"""

_DECLARED_NAME = re.compile(r"^export (?:type|interface) (\w+)", re.MULTILINE)


@dataclass(frozen=True)
class GeneratedContract:
    """What the base generator would emit for one contract."""

    declarations: tuple[str, ...]
    queries: tuple[tuple[str, str], ...] = ()
    extra_imports: tuple[str, ...] = ()

    def declared_names(self) -> list[str]:
        return _DECLARED_NAME.findall("\n".join(self.declarations))

    def imported_names(self) -> list[str]:
        names = self.declared_names()
        for name in (*self.extra_imports, *(response for _, response in self.queries)):
            if name not in names:
                names.append(name)
        return names


@dataclass
class FakeBindingGenerator:
    """Writes canned modules instead of running ts-codegen."""

    contracts: Mapping[str, GeneratedContract]
    calls: list[tuple[tuple[str, ...], Path, bool]] = field(default_factory=list)

    async def generate(self, contracts, output_dir: Path, *, react_query: bool) -> None:
        names = tuple(contract.name for contract in contracts)
        self.calls.append((names, output_dir, react_query))
        write_generated_bindings(
            output_dir, {name: self.contracts[name] for name in names}, react_query=react_query
        )


def _lower_first(name: str) -> str:
    return name[:1].lower() + name[1:]


def _pascal(name: str) -> str:
    return name[:1].upper() + name[1:]


def render_types_module(contract: GeneratedContract) -> str:
    return GENERATED_HEADER + "\n" + "\n".join(contract.declarations) + "\n"


def render_client_module(contract_name: str, contract: GeneratedContract) -> str:
    imports = ", ".join(contract.imported_names())
    signatures = "".join(
        f"  {method}: () => Promise<{response}>;\n" for method, response in contract.queries
    )
    bindings = "".join(
        f"    this.{method} = this.{method}.bind(this);\n" for method, _ in contract.queries
    )
    implementations = "".join(
        f"""  {method} = async (): Promise<{response}> => {{
    return this.client.queryContractSmart(this.contractAddress, {{
      {method}: {{}}
    }});
  }};
"""
        for method, response in contract.queries
    )
    return f"""{GENERATED_HEADER}
import {{ CosmWasmClient, SigningCosmWasmClient, ExecuteResult }} from "@cosmjs/cosmwasm-stargate";
import {{ StdFee }} from "@cosmjs/amino";
import {{{imports}}} from "./{contract_name}.types";
export interface {contract_name}ReadOnlyInterface {{
  contractAddress: string;
{signatures}}}
export class {contract_name}QueryClient implements {contract_name}ReadOnlyInterface {{
  client: CosmWasmClient;
  contractAddress: string;

  constructor(client: CosmWasmClient, contractAddress: string) {{
    this.client = client;
    this.contractAddress = contractAddress;
{bindings}  }}

{implementations}}}
export interface {contract_name}Interface extends {contract_name}ReadOnlyInterface {{
  contractAddress: string;
  sender: string;
  withdraw: (fee?: number | StdFee | "auto", memo?: string) => Promise<ExecuteResult>;
}}
export class {contract_name}Client extends {contract_name}QueryClient implements {contract_name}Interface {{
  client: SigningCosmWasmClient;
  sender: string;
  contractAddress: string;

  constructor(client: SigningCosmWasmClient, sender: string, contractAddress: string) {{
    super(client, contractAddress);
    this.client = client;
    this.sender = sender;
    this.contractAddress = contractAddress;
    this.withdraw = this.withdraw.bind(this);
  }}

  withdraw = async (fee: number | StdFee | "auto" = "auto", memo?: string): Promise<ExecuteResult> => {{
    return await this.client.execute(this.sender, this.contractAddress, {{
      withdraw: {{}}
    }}, fee, memo);
  }};
}}
"""


def render_react_query_module(contract_name: str, contract: GeneratedContract) -> str:
    imports = ", ".join(contract.imported_names())
    hooks = "".join(
        f"""export interface {contract_name}{_pascal(method)}Query<TData> extends {contract_name}ReactQuery<{response}, TData> {{}}
export function use{contract_name}{_pascal(method)}Query<TData = {response}>({{
  client,
  options
}}: {contract_name}{_pascal(method)}Query<TData>) {{
  return useQuery<{response}, Error, TData>(["{_lower_first(contract_name)}{_pascal(method)}", client?.contractAddress], () => client ? client.{method}() : Promise.reject(new Error("Invalid client")), {{
    ...options,
    enabled: !!client && (options?.enabled != undefined ? options.enabled : true)
  }});
}}
"""
        for method, response in contract.queries
    )
    return f"""{GENERATED_HEADER}
import {{ UseQueryOptions, useQuery }} from "@tanstack/react-query";
import {{ ExecuteResult }} from "@cosmjs/cosmwasm-stargate";
import {{ StdFee }} from "@cosmjs/amino";
import {{{imports}}} from "./{contract_name}.types";
import {{ {contract_name}QueryClient }} from "./{contract_name}.client";
export interface {contract_name}ReactQuery<TResponse, TData = TResponse> {{
  client: {contract_name}QueryClient | undefined;
  options?: Omit<UseQueryOptions<TResponse, Error, TData>, "'queryKey' | 'queryFn' | 'initialData'"> & {{
    initialData?: undefined;
  }};
}}
{hooks}"""


def render_index_module(contract_names: Sequence[str], *, react_query: bool) -> str:
    suffixes = ("types", "client", "react-query") if react_query else ("types", "client")
    imports: list[str] = []
    members: list[str] = []
    counter = 0
    for name in contract_names:
        aliases = []
        for suffix in suffixes:
            imports.append(f'import * as _{counter} from "./{name}.{suffix}";')
            aliases.append(f"..._{counter}")
            counter += 1
        members.append(f"  export const {name} = {{ {', '.join(aliases)} }};")
    return (
        GENERATED_HEADER
        + "\n"
        + "\n".join(imports)
        + "\nexport namespace contracts {\n"
        + "\n".join(members)
        + "\n}"
    )


def write_generated_bindings(
    output_dir: Path, contracts: Mapping[str, GeneratedContract], *, react_query: bool
) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    for name, contract in contracts.items():
        (output_dir / f"{name}.types.ts").write_text(
            render_types_module(contract), encoding="utf-8"
        )
        (output_dir / f"{name}.client.ts").write_text(
            render_client_module(name, contract), encoding="utf-8"
        )
        if react_query:
            (output_dir / f"{name}.react-query.ts").write_text(
                render_react_query_module(name, contract), encoding="utf-8"
            )
    (output_dir / "index.ts").write_text(
        render_index_module(sorted(contracts), react_query=react_query), encoding="utf-8"
    )


COIN = """export interface Coin {
  amount: Uint128;
  denom: string;
}"""

ALPHA = GeneratedContract(
    declarations=(
        "export type Uint128 = string;",
        "export interface InstantiateMsg {\n  admin?: string | null;\n}",
        "export type ExecuteMsg = {\n  withdraw: {};\n};",
        COIN,
        "export type QueryMsg = {\n  balance: {};\n};",
        "export interface BalanceResponse {\n  amount: Coin;\n}",
    ),
    queries=(("balance", "BalanceResponse"),),
)

BETA = GeneratedContract(
    declarations=(
        "export type Uint128 = string;",
        "export interface InstantiateMsg {\n  owner: string;\n}",
        "export type ExecuteMsg = {\n  withdraw: {};\n};",
        COIN,
        "export type QueryMsg = {\n  reserves: {};\n};",
        "export interface ReservesResponse {\n  assets: Coin[];\n}",
    ),
    queries=(("reserves", "ReservesResponse"),),
)

GAMMA = GeneratedContract(
    declarations=(
        "export interface InstantiateMsg {}",
        "export type ExecuteMsg = {\n  withdraw: {};\n};",
        "export type QueryMsg = {\n  oracle: OracleQuery;\n};",
        "export type OracleQuery = {\n  tax_rate: {};\n} | {\n  tax_cap: {\n    denom: string;\n  };\n};",
        "export type Decimal = string;",
        "export type Uint128 = string;",
        "export interface TaxRateResponse {\n  rate: Decimal;\n}",
        "export interface TaxCapResponse {\n  cap: Uint128;\n}",
    ),
    queries=(("oracle", "OracleResponse"),),
)


def gamma_schema(*, wrapped: bool = False) -> dict[str, Any]:
    """Consolidated schema of a contract whose query message nests an oracle query."""
    reference: dict[str, Any] = {"$ref": "#/definitions/OracleQuery"}
    variant = (
        {
            "type": "object",
            "required": ["oracle"],
            "properties": {"oracle": reference},
            "additionalProperties": False,
        }
        if wrapped
        else reference
    )
    return {
        "contract_name": "gamma",
        "contract_version": "0.1.0",
        "idl_version": "1.0.0",
        "instantiate": {"title": "InstantiateMsg", "type": "object"},
        "execute": None,
        "query": {
            "$schema": "http://json-schema.org/draft-07/schema#",
            "title": "QueryMsg",
            "anyOf": [variant],
            "definitions": {
                "OracleQuery": {
                    "oneOf": [
                        {
                            "type": "object",
                            "required": ["tax_rate"],
                            "properties": {"tax_rate": {"type": "object"}},
                            "additionalProperties": False,
                        },
                        {
                            "type": "object",
                            "required": ["tax_cap"],
                            "properties": {
                                "tax_cap": {
                                    "type": "object",
                                    "required": ["denom"],
                                    "properties": {"denom": {"type": "string"}},
                                }
                            },
                            "additionalProperties": False,
                        },
                    ]
                }
            },
        },
        "migrate": None,
        "sudo": None,
        "responses": {
            "tax_rate": {"title": "TaxRateResponse", "type": "object"},
            "tax_cap": {"title": "TaxCapResponse", "type": "object"},
        },
    }


def flat_schema(contract_name: str) -> dict[str, Any]:
    return {
        "contract_name": contract_name,
        "contract_version": "0.1.0",
        "idl_version": "1.0.0",
        "query": {
            "title": "QueryMsg",
            "oneOf": [
                {
                    "type": "object",
                    "required": ["config"],
                    "properties": {"config": {"type": "object"}},
                    "additionalProperties": False,
                }
            ],
        },
        "responses": {"config": {"title": "ConfigResponse", "type": "object"}},
    }


def write_contract_package(
    contracts_dir: Path, package_name: str, schema: Mapping[str, Any] | None
) -> Path:
    package_dir = contracts_dir / package_name
    schema_dir = package_dir / "artifacts" / "schema"
    schema_dir.mkdir(parents=True, exist_ok=True)
    (package_dir / "Cargo.toml").write_text(
        f'[package]\nname = "{package_name}"\nversion = "0.1.0"\n', encoding="utf-8"
    )
    if schema is not None:
        schema_file = schema_dir / f"{package_name.replace('_', '-')}.json"
        schema_file.write_text(json.dumps(schema, indent=2), encoding="utf-8")
    return package_dir


@pytest.fixture
def generated_contracts() -> dict[str, GeneratedContract]:
    return {"Alpha": ALPHA, "Beta": BETA, "Gamma": GAMMA}


@pytest.fixture
def write_bindings() -> Callable[..., None]:
    return write_generated_bindings


@pytest.fixture
def fake_generator_factory() -> Callable[[Mapping[str, GeneratedContract]], FakeBindingGenerator]:
    return FakeBindingGenerator


@pytest.fixture
def contract_workspace(tmp_path: Path) -> Path:
    """Workspace with packages alpha, beta (flat queries) and gamma (nested oracle query)."""
    contracts_dir = tmp_path / "contracts"
    write_contract_package(contracts_dir, "alpha", flat_schema("alpha"))
    write_contract_package(contracts_dir, "beta", flat_schema("beta"))
    write_contract_package(contracts_dir, "gamma", gamma_schema())
    return tmp_path


@pytest.fixture
def nested_schema() -> Callable[..., dict[str, Any]]:
    return gamma_schema


@pytest.fixture
def add_contract_package() -> Callable[..., Path]:
    return write_contract_package
