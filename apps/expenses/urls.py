from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'expenses'

router = DefaultRouter()
router.register(r'', views.ExpenseViewSet, basename='expense')

urlpatterns = [
    # GET    /api/expenses/               - List expenses (?room=&settled=&category=)
    # POST   /api/expenses/               - Log an expense
    # GET    /api/expenses/{id}/          - Get expense
    # DELETE /api/expenses/{id}/          - Delete unsettled expense (payer/owner)
    # POST   /api/expenses/{id}/settle/   - Mark settled
    path('', include(router.urls)),
]
