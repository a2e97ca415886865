"""
GSL Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path(
        "guests/<str:guest_id>/stays/<str:room_id>",
        views.check_in_view,
    ),
    path(
        "guests/<str:guest_id>/stays/<str:room_id>/periods/<str:check_in_date>",
        views.stay_period_view,
    ),
    path(
        "guests/<str:guest_id>/stays/<str:room_id>/periods/<str:check_in_date>/charges",
        views.charges_view,
    ),
    path(
        "guests/<str:guest_id>/stays/<str:room_id>/periods/<str:check_in_date>/payments",
        views.payments_view,
    ),
]
