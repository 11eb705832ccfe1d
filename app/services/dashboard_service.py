"""
Dashboard service - feeds stored citizens and geography into the aggregation engine.
"""
import logging
from sqlalchemy.orm import Session
from app.schemas.dashboard import FilterCriteria
from app.services.access_control import AccessScope
from app.services.aggregation import AggregationEngine
from app.services.citizen_service import CitizenService
from app.services.geography_service import GeographyService
from typing import Dict, Any, List

logger = logging.getLogger(__name__)


class DashboardService:
    """Build dashboard reports for a caller's filters and access scope."""

    def __init__(self, db: Session):
        self.db = db
        self.citizens = CitizenService(db)
        self.geography = GeographyService(db)

    def engine_for(self, criteria: FilterCriteria, scope: AccessScope) -> AggregationEngine:
        records = self.citizens.load_records(criteria, scope)
        return AggregationEngine(records, criteria)

    def get_report(self, criteria: FilterCriteria, scope: AccessScope) -> Dict[str, Any]:
        """
        Compute the full dashboard report.

        LGU statistics are only produced when a province is selected.
        """
        engine = self.engine_for(criteria, scope)
        provinces = self.geography.get_provinces()
        lgus = self.geography.get_lgus(criteria.province_code) if criteria.province_code else None

        report = engine.build_report(provinces, lgus)
        logger.info(
            f"Dashboard report for {scope.staff_id}: {report['totalCitizens']} citizens, "
            f"years={criteria.calendar_years}"
        )
        return report

    def get_province_stats(self, criteria: FilterCriteria, scope: AccessScope) -> List[Dict[str, Any]]:
        engine = self.engine_for(criteria, scope)
        return engine.by_province(self.geography.get_provinces())

    def get_lgu_stats(self, criteria: FilterCriteria, scope: AccessScope) -> List[Dict[str, Any]]:
        """Per-LGU counts for the selected province; empty without one."""
        if not criteria.province_code:
            return []
        engine = self.engine_for(criteria, scope)
        return engine.by_lgu(self.geography.get_lgus(criteria.province_code))
