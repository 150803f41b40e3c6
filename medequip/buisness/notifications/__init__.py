from medequip.buisness.notifications.notifier import Notifier, TelegramNotifier
from medequip.buisness.notifications.messages import DailySummary
