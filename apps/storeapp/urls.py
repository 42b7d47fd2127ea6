# apps/storeapp/urls.py
from django.urls import path

from apps.storeapp.views import CalendarAPIView

urlpatterns = [
    path("calendar/", CalendarAPIView.as_view(), name="calendar"),
]
