from medequip.buisness.maintenance.maintenance_manager import MaintenanceManager, UpcomingPm
