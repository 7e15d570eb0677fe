from django.conf import settings
from django.contrib import admin
from django.urls import include, path


urlpatterns = [
    path("api/", include("taskboard.urls")),
]

# admin UI only while developing
if settings.DEBUG:
    urlpatterns.append(path("admin/", admin.site.urls))
