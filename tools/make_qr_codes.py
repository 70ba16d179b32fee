from __future__ import annotations

from pathlib import Path

import qrcode

from menuchat.db import SessionLocal
from menuchat.main import order_link
from menuchat.models import Menu

OUT_DIR = Path(__file__).resolve().parents[1] / "qrcodes"


def main(out_dir: Path = OUT_DIR) -> int:
    out_dir.mkdir(parents=True, exist_ok=True)

    db = SessionLocal()
    try:
        menus = db.query(Menu).filter(Menu.is_closed.is_(False)).order_by(Menu.id).all()
        if not menus:
            print("No open menus found")
            return 0

        made = 0
        for menu in menus:
            url = order_link(menu.id)
            img = qrcode.make(url)

            out_path = out_dir / f"menu_{menu.id}.png"
            img.save(out_path)

            print(f"OK  {menu.menu_date}  ->  {out_path}  ({url})")
            made += 1
    finally:
        db.close()

    print(f"\nDone. Generated {made} QR codes in: {out_dir}")
    return made


if __name__ == "__main__":
    main()
