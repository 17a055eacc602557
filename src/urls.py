from django.contrib import admin
from django.urls import path

urlpatterns = [
    # Moderation (review approval, aggregates read-only)
    path("admin/", admin.site.urls),
]
