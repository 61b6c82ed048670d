from __future__ import annotations

# Lines are kept as a tuple so the trailing spaces on the dataCriacao
# ternary survive editors that strip whitespace.
_FROM_MAP_LINES = (
    "",
    "",
    "  factory Recibo.fromMap(Map<String, dynamic> data, {String? id}) {",
    "    return Recibo(",
    "      id: id ?? data['id'] ?? '',",
    "      numero: data['numero'] ?? 0,",
    "      cliente: Cliente.fromMap(data['cliente'] ?? {}),",
    "      itens: List<Map<String, dynamic>>.from(data['itens'] ?? []),",
    "      subtotal: (data['subtotal'] ?? 0.0).toDouble(),",
    "      desconto: (data['desconto'] ?? 0.0).toDouble(),",
    "      valorTotal: (data['valorTotal'] ?? 0.0).toDouble(),",
    "      status: data['status'] ?? 'Pago',",
    "      dataCriacao: data['dataCriacao'] is Timestamp ",
    "          ? data['dataCriacao'] ",
    "          : Timestamp.now(),",
    "      dataPagamento: data['dataPagamento'],",
    "      metodoPagamento: data['metodoPagamento'],",
    "      observacoes: data['observacoes'],",
    "      informacoesAdicionais: data['informacoesAdicionais'],",
    "      fotos: data['fotos'] != null ? List<String>.from(data['fotos']) : null,",
    "    );",
    "  }",
)

FROM_MAP_METHOD = "\n".join(_FROM_MAP_LINES)

# Written after the template in place of everything from the located brace on.
CLOSING_SUFFIX = "\n}\n"

FROM_MAP_SIGNATURE = "factory Recibo.fromMap("

SUCCESS_MESSAGE = "fromMap adicionado ao Recibo!"
