import pytest

LEGACY_IMPORT = 'import { InputBase, Address } from "~~/components/scaffold-eth";\n'
MODERN_IMPORT = 'import { BaseInput as InputBase, Address } from "@scaffold-ui/components";\n'


@pytest.fixture
def project(tmp_path):
    """
    Sets up a small frontend tree.

    /packages/nextjs
       app/page.tsx              legacy import
       app/utils.ts              nothing to migrate
       app/Input.args.mjs        legacy nested path
       docs/README.md            legacy path in prose
       styles.css                unsupported extension
       node_modules/lib/index.js ignored directory
    """
    root = tmp_path / "packages" / "nextjs"
    (root / "app").mkdir(parents=True)
    (root / "docs").mkdir()
    (root / "node_modules" / "lib").mkdir(parents=True)

    (root / "app" / "page.tsx").write_text(LEGACY_IMPORT, encoding="utf-8")
    (root / "app" / "utils.ts").write_text('export const x = 1;\n', encoding="utf-8")
    (root / "app" / "Input.args.mjs").write_text(
        'import { EtherInput } from "~~/components/scaffold-eth/Input/EtherInput";\n', encoding="utf-8"
    )
    (root / "docs" / "README.md").write_text(
        "Import from `~~/components/scaffold-eth/Address`.\n", encoding="utf-8"
    )
    (root / "styles.css").write_text("/* ~~/components/scaffold-eth/Address */\n", encoding="utf-8")
    (root / "node_modules" / "lib" / "index.js").write_text(LEGACY_IMPORT, encoding="utf-8")
    return root
