from .service import CovidDataService
from .state import DashboardState, reduce, load_dashboard, refresh_dashboard

__all__ = ['CovidDataService', 'DashboardState', 'reduce', 'load_dashboard', 'refresh_dashboard']
