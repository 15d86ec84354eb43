from __future__ import annotations

import argparse
import sys

from sqlalchemy.exc import SQLAlchemyError

from hospital.api_main import serve
from hospital.bootstrap import Application, bootstrap, open_application
from hospital.config import Settings
from hospital.errors import RecordsError
from hospital.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def cmd_serve(args: argparse.Namespace, settings: Settings) -> None:
    serve(settings)


def cmd_seed(args: argparse.Namespace, settings: Settings) -> None:
    app = bootstrap(settings)
    try:
        r = app.seed_result
        print(f"Seed terminé : rendez-vous {r.appointment_id}, consultation {r.consultation_id}.")
    finally:
        app.close()


def cmd_sync_schema(args: argparse.Namespace, settings: Settings) -> None:
    app = open_application(settings)
    app.close()
    print("Schéma synchronisé.")


def _print_rows(app: Application, entity: str) -> None:
    if entity == "patients":
        for p in app.patients.find_all():
            print(f"{p.id} | {p.name} | malade={p.is_sick} | score={p.score}")
    elif entity == "doctors":
        for d in app.doctors.find_all():
            print(f"{d.id} | {d.name} | {d.specialty or '-'} | {d.email or '-'}")
    elif entity == "appointments":
        for a in app.appointments.find_all():
            print(f"{a.id} | {a.date_time.isoformat()} | {a.status.value} | {a.patient.name} -> {a.doctor.name}")
    elif entity == "consultations":
        for c in app.consultations.find_all():
            print(f"{c.id} | {c.consultation_date.isoformat()} | rdv {c.appointment_id} | {c.report or '-'}")
    elif entity == "users":
        for u in app.users.find_all():
            roles = ", ".join(r.name for r in u.roles) or "-"
            print(f"{u.id} | {u.username} | {roles}")


def cmd_list(args: argparse.Namespace, settings: Settings) -> None:
    app = open_application(settings)
    try:
        _print_rows(app, args.entity)
    finally:
        app.close()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="hospital", description="Dossiers hôpital : démarrage, seed et consultation")
    sub = p.add_subparsers(required=True)

    p_serve = sub.add_parser("serve", help="Démarre, exécute le seed et reste en attente sur le port")
    p_serve.set_defaults(func=cmd_serve)

    p_seed = sub.add_parser("seed", help="Démarre, exécute le seed et quitte")
    p_seed.set_defaults(func=cmd_seed)

    p_sync = sub.add_parser("sync-schema", help="Synchronise le schéma uniquement")
    p_sync.set_defaults(func=cmd_sync_schema)

    p_list = sub.add_parser("list", help="Liste les entités")
    p_list.add_argument("entity", choices=["patients", "doctors", "appointments", "consultations", "users"])
    p_list.set_defaults(func=cmd_list)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Settings.from_env()
    setup_logging(settings.log_level, settings.log_file)
    try:
        args.func(args, settings)
    except RecordsError:
        logger.exception("Échec fatal")
        return 1
    except SQLAlchemyError:
        # erreur de stockage non classée : même politique, on s'arrête
        logger.exception("Échec fatal (erreur base de données)")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
