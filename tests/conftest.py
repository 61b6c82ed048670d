# tests/conftest.py
import logging
import sys
from pathlib import Path

import pytest

# Ensure project root is importable (so `import recibo_patch...` works in all runners)
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _restore_root_logging():
    # main() reconfigures the root logger; undo it so handlers bound to
    # capsys streams do not leak into later tests.
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


RECIBO_DART = """import 'package:cloud_firestore/cloud_firestore.dart';
import 'cliente.dart';

class Recibo {
  final String id;
  final int numero;
  final Cliente cliente;

  Recibo({required this.id, required this.numero, required this.cliente});

  factory Recibo.fromFirestore(DocumentSnapshot doc) {
    final data = doc.data() as Map<String, dynamic>;
    return Recibo(id: doc.id, numero: data['numero'] ?? 0, cliente: Cliente.fromMap(data['cliente'] ?? {}));
  }

  Map<String, dynamic> toMap() {
    return {'numero': numero, 'cliente': cliente.toMap()};
  }
}
"""


@pytest.fixture
def recibo_file(tmp_path):
    p = tmp_path / "lib" / "models" / "recibo.dart"
    p.parent.mkdir(parents=True)
    p.write_text(RECIBO_DART, encoding="utf-8")
    return p


@pytest.fixture
def plain_config(tmp_path):
    # No class declaration check, so bare `class R { ... }` samples patch.
    p = tmp_path / "plain.yaml"
    p.write_text('patch:\n  class_name: ""\n', encoding="utf-8")
    return p
