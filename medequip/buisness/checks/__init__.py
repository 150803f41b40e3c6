from medequip.buisness.checks.check_manager import CheckManager, evaluate
