#!/usr/bin/env python3
"""
Database build for the CMMS
Creates tables, ensures the critical admin account and optionally loads demo data
"""

from pathlib import Path
import json

from dateutil import parser as dateutil_parser
from flask import current_app

from cmms import db
from cmms.logger import get_logger
from cmms.utils.date_utils import to_date

logger = get_logger("cmms.build")

DEMO_DATA_FILE = Path(__file__).parent / 'data' / 'build_data_demo.json'


def verify_critical_data():
    """
    Verify that critical data is present in the database

    Returns:
        bool: True if an active admin account exists
    """
    from cmms.data.core.user_info.user import User, UserRole

    admin = User.query.filter_by(role=UserRole.ADMIN, is_active=True).first()
    if admin is None:
        logger.warning("No active admin user found")
        return False
    return True


def insert_critical_data():
    """
    Create the admin account named by ADMIN_USERNAME / ADMIN_PASSWORD.

    Raises:
        RuntimeError: no admin exists and ADMIN_PASSWORD is not configured
    """
    from cmms.data.core.user_info.user import User, UserRole

    if verify_critical_data():
        logger.info("Critical data already present, skipping insertion")
        return

    username = current_app.config.get('ADMIN_USERNAME') or 'admin'
    password = current_app.config.get('ADMIN_PASSWORD')
    if not password:
        logger.critical("ADMIN_PASSWORD not set and no admin user exists")
        raise RuntimeError("ADMIN_PASSWORD environment variable is required to create the admin user")

    try:
        User.create_from_dict({'username': username, 'password': password, 'role': UserRole.ADMIN})
    except Exception as e:
        logger.error(f"Critical data insertion failed: {e}")
        raise

    logger.info(f"Inserted admin user: {username}")


def _load_demo_data(path):
    if not path.exists():
        raise FileNotFoundError(f"Demo data file not found: {path}")
    with open(path, 'r') as f:
        return json.load(f)


def insert_demo_data(path=DEMO_DATA_FILE):
    """
    Load assets, maintenance schedules, work orders and problem buttons
    from a JSON file.

    Schedules and work orders refer to their asset by name. Skipped entirely
    when any asset already exists.

    Returns:
        dict: Number of rows inserted per table
    """
    from cmms.data.core.asset_info.asset import Asset
    from cmms.data.core.user_info.user import User, UserRole
    from cmms.data.maintenance.maintenance_schedules import MaintenanceSchedule
    from cmms.data.problems.problem_button import ProblemButton
    from cmms.data.work_orders.work_order import WorkOrder

    if Asset.query.first() is not None:
        logger.info("Assets already present, skipping demo data")
        return {}

    demo = _load_demo_data(path)
    admin = User.query.filter_by(role=UserRole.ADMIN).first()
    admin_id = admin.id if admin else None

    try:
        assets = {}
        for asset_data in demo.get('assets', []):
            asset = Asset.from_dict(asset_data, user_id=admin_id)
            db.session.add(asset)
            assets[asset.name] = asset
        db.session.flush()

        for schedule_data in demo.get('maintenance_schedules', []):
            data = dict(schedule_data)
            data['asset_id'] = assets[data.pop('asset')].id
            data['start_date'] = to_date(data['start_date'])
            if data.get('end_date'):
                data['end_date'] = to_date(data['end_date'])
            db.session.add(MaintenanceSchedule.from_dict(data, user_id=admin_id))

        for work_order_data in demo.get('work_orders', []):
            data = dict(work_order_data)
            asset_name = data.pop('asset', None)
            data['asset_id'] = assets[asset_name].id if asset_name else None
            data['due_date'] = dateutil_parser.isoparse(data['due_date'])
            db.session.add(WorkOrder.from_dict(data, user_id=admin_id))

        for button_data in demo.get('problem_buttons', []):
            db.session.add(ProblemButton.from_dict(button_data, user_id=admin_id))

        db.session.commit()
    except Exception as e:
        db.session.rollback()
        logger.error(f"Demo data insertion failed: {e}")
        raise

    summary = {
        'assets': len(assets),
        'maintenance_schedules': len(demo.get('maintenance_schedules', [])),
        'work_orders': len(demo.get('work_orders', [])),
        'problem_buttons': len(demo.get('problem_buttons', [])),
    }
    logger.info(f"Inserted demo data: {summary}")
    return summary


def build_database(app, demo_data=False):
    """
    Main build orchestrator for the CMMS

    Args:
        app: Flask application to build against
        demo_data (bool): Whether to load the demo data set
                          Note: Critical data is ALWAYS checked and inserted
    """
    with app.app_context():
        logger.info(f"Starting database build (demo data: {demo_data})")

        db.create_all()
        logger.info("All database tables created")

        insert_critical_data()

        if demo_data:
            insert_demo_data()

        logger.info("Database build completed successfully")
