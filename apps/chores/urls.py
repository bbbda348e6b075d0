from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'chores'

router = DefaultRouter()
router.register(r'', views.ChoreViewSet, basename='chore')

urlpatterns = [
    # GET    /api/chores/                 - List chores (?room=&completed=)
    # POST   /api/chores/                 - Create chore
    # GET    /api/chores/{id}/            - Get chore
    # POST   /api/chores/{id}/complete/   - Mark completed
    # POST   /api/chores/{id}/reopen/     - Mark open again
    path('', include(router.urls)),
]
