"""Contract context module rendering.

Consumers used to look generated clients up by concatenating a kind string into
a class name; the rendered module replaces that with a static constructor table
and one cached handle per contract kind.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .binding_layout import CONTEXT_FILE, OutputForm

_CONTEXT_TEMPLATE = """import {{ SigningCosmWasmClient }} from "@cosmjs/cosmwasm-stargate";
{imports}

export const CONTRACT_CLIENTS = {{
{table}
}} as const;

export type ContractKind = keyof typeof CONTRACT_CLIENTS;
export type ContractClient<K extends ContractKind> = InstanceType<(typeof CONTRACT_CLIENTS)[K]>;

export class ContractContext {{
  private readonly handles: {{ [K in ContractKind]?: ContractClient<K> }} = {{}};

  constructor(private readonly client: SigningCosmWasmClient, private sender: string) {{}}

  setSender(sender: string): void {{
    this.sender = sender;
  }}

  get<K extends ContractKind>(kind: K, contractAddress: string): ContractClient<K> {{
    let handle = this.handles[kind] as ContractClient<K> | undefined;
    if (!handle) {{
      const Client = CONTRACT_CLIENTS[kind] as any;
      handle = new Client(this.client, this.sender, contractAddress) as ContractClient<K>;
      this.handles[kind] = handle as any;
    }} else {{
      handle.sender = this.sender;
      handle.contractAddress = contractAddress;
    }}
    return handle;
  }}
}}
"""


def contract_kind(contract_name: str) -> str:
    return contract_name[:1].lower() + contract_name[1:]


def render_context_module(contract_names: Sequence[str]) -> str:
    imports = "\n".join(
        f'import {{ {name}Client }} from "{OutputForm.CLIENT.module_specifier(name)}";'
        for name in contract_names
    )
    table = "\n".join(f"  {contract_kind(name)}: {name}Client," for name in contract_names)
    return _CONTEXT_TEMPLATE.format(imports=imports, table=table)


def write_context_module(output_dir: Path, contract_names: Sequence[str]) -> Path:
    destination = output_dir / CONTEXT_FILE
    destination.write_text(render_context_module(contract_names), encoding="utf-8")
    return destination
